"""Asset domain specific exceptions."""

from signature_studio.core.errors import ValidationFailedError


class UnsupportedFileTypeError(ValidationFailedError):
    code = "INVALID_FILE_TYPE"
    message = "Only image files (jpeg, jpg, png, gif, svg, webp) are allowed"


class FileTooLargeError(ValidationFailedError):
    code = "FILE_TOO_LARGE"
    message = "File exceeds the maximum upload size"


class EmptyFileError(ValidationFailedError):
    code = "EMPTY_FILE"
    message = "Uploaded file is empty"


class TooManyFilesError(ValidationFailedError):
    code = "TOO_MANY_FILES"
    message = "Too many files in one request"
