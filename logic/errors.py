"""Exception taxonomy shared by the generator, storage and sharing helpers."""


class StiloError(Exception):
    pass


class GenerationFailure(StiloError):
    """The structured outfit request failed or returned an unusable payload."""


class ImageFailure(StiloError):
    """One garment image could not be produced."""

    def __init__(self, item: str, reason: str) -> None:
        super().__init__(f"Image generation failed for '{item}': {reason}")
        self.item = item
        self.reason = reason


class DecodeFailure(StiloError):
    """A shared link or stored favorites blob could not be decoded."""


class RequestSuperseded(StiloError):
    """A newer outfit request replaced this one before it finished."""


__all__ = [
    "StiloError",
    "GenerationFailure",
    "ImageFailure",
    "DecodeFailure",
    "RequestSuperseded",
]
