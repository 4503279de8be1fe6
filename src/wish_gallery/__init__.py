"""WishGallery - bounded image collection with a Ken Burns carousel and lightbox."""

__version__ = "1.0.0"
