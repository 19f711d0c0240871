from __future__ import annotations


class MixcloudUploaderError(Exception):
    """Base class for errors that end a run with a non-zero exit code."""


class ConfigError(MixcloudUploaderError):
    pass


class CredentialsError(MixcloudUploaderError):
    pass


class MixcloudApiError(MixcloudUploaderError):
    """Transport or decode failure while talking to the Mixcloud API."""


class UploadFileError(MixcloudUploaderError):
    pass


class DateInputError(MixcloudUploaderError):
    pass


class InputError(MixcloudUploaderError):
    pass
