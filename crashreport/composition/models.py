from dataclasses import dataclass


@dataclass(frozen=True)
class ComposedArtifact:
    """Text and image handed to the publisher for one run."""

    text: str
    image: bytes
    image_format: str = "PNG"
