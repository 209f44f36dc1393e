from datetime import datetime, timezone

import httpx

from crashreport.publishing.base import BasePublisher
from crashreport.publishing.exceptions import PublishError
from crashreport.publishing.models import PublishReceipt


class WebhookPublisher(BasePublisher):
    """Posts the report as multipart form data to a publishing webhook.

    The webhook owns the social-media transport and its credentials. A JSON
    response with an ``id`` becomes the receipt reference.
    """

    NAME = "webhook"

    def __init__(
        self,
        *,
        url: str,
        timeout_seconds: int,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def publish(self, text: str, image: bytes) -> PublishReceipt:
        try:
            with httpx.Client(
                timeout=self._timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.post(
                    self._url,
                    data={"text": text},
                    files={"image": ("report.png", image, "image/png")},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise PublishError(
                f"Publisher returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise PublishError(f"Publisher network error: {exc}") from exc

        return PublishReceipt(
            publisher=self.NAME,
            reference=self._reference(response),
            published_at=datetime.now(timezone.utc),
        )

    @staticmethod
    def _reference(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return ""
        if isinstance(body, dict) and body.get("id") is not None:
            return str(body["id"])
        return ""
