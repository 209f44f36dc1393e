from datetime import datetime, timezone
from pathlib import Path

from crashreport.logging.logger import Log
from crashreport.publishing.base import BasePublisher
from crashreport.publishing.exceptions import PublishError
from crashreport.publishing.models import PublishReceipt


class FilesystemPublisher(BasePublisher):
    """Writes the report as ``<stamp>.txt`` and ``<stamp>.png`` into a directory.

    Useful for local runs and for handing the artifact to a separate
    upload job. Both files are staged under hidden ``.partial`` names and
    moved into place only after both writes succeed, image first, so a
    ``.txt`` in the directory always has its image next to it.
    """

    NAME = "filesystem"
    STAMP_FORMAT = "%Y%m%dT%H%M%S%fZ"

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    def publish(self, text: str, image: bytes) -> PublishReceipt:
        published_at = datetime.now(timezone.utc)
        stamp = published_at.strftime(self.STAMP_FORMAT)
        text_path = self._output_dir / f"{stamp}.txt"
        image_path = self._output_dir / f"{stamp}.png"
        staged_text = self._output_dir / f".{stamp}.txt.partial"
        staged_image = self._output_dir / f".{stamp}.png.partial"
        published: list[Path] = []
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            staged_image.write_bytes(image)
            staged_text.write_text(text, encoding="utf-8")
            for staged, final in ((staged_image, image_path), (staged_text, text_path)):
                if final.exists():
                    raise FileExistsError(f"{final} already exists")
                staged.replace(final)
                published.append(final)
        except OSError as exc:
            self._discard(staged_text, staged_image, *published)
            raise PublishError(f"Failed to write report to {self._output_dir}: {exc}") from exc
        return PublishReceipt(
            publisher=self.NAME,
            reference=str(text_path.with_suffix("")),
            published_at=published_at,
        )

    @staticmethod
    def _discard(*paths: Path) -> None:
        for path in paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                Log.warning(f"Could not remove {path}: {exc}")
