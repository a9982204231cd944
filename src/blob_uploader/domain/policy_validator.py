"""Pre-flight checks of a file against the upload policy."""

from blob_uploader.exceptions import SizeExceededError, UnsupportedFormatError

from .models import FileDescriptor, UploadPolicy


class PolicyValidator:
    """Rejects files that are too large or of an unaccepted format."""

    def validate(self, file: FileDescriptor, policy: UploadPolicy) -> None:
        """
        Checks size first, then extension.

        Args:
            file: The candidate file.
            policy: Limits for this upload.

        Raises:
            SizeExceededError: If the file is larger than the policy allows.
            UnsupportedFormatError: If the extension is in neither format set.
        """
        if file.size > policy.max_size_bytes:
            raise SizeExceededError(file.name, file.size, policy.max_size_bytes)

        if not policy.accepts(file.extension):
            raise UnsupportedFormatError(file.name, file.extension)
