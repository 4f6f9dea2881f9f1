"""Pure rendition algorithms: fit math, codecs and the resize-or-copy step."""
