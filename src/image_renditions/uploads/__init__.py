from .file_uploader import FileUploader

__all__ = ["FileUploader"]
