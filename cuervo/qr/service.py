# cuervo/qr/service.py
from __future__ import annotations

from urllib.parse import quote

from cuervo.core.config import settings


class QRLinkGenerator:
    """
    ownerId → link público → URL del PNG en el servicio externo de QR.
    Sin estado salvo el último valor generado.
    """

    def __init__(
        self,
        public_base_url: str | None = None,
        qr_api_url: str | None = None,
        size: int | None = None,
        bgcolor: str | None = None,
    ):
        self.public_base_url = (public_base_url or settings.PUBLIC_BASE_URL).rstrip("/")
        self.qr_api_url = qr_api_url or settings.QR_API_URL
        self.size = size or settings.QR_SIZE
        self.bgcolor = bgcolor or settings.QR_BGCOLOR
        self.last = ""

    def public_url(self, owner_id: str) -> str:
        return f"{self.public_base_url}/public/{owner_id}"

    def generate(self, owner_id: str | None) -> str:
        if not owner_id:
            return ""
        # quote(safe="") ~ encodeURIComponent: se escapan ':' y '/'
        data = quote(self.public_url(owner_id), safe="")
        self.last = (
            f"{self.qr_api_url}?data={data}"
            f"&size={self.size}x{self.size}&bgcolor={self.bgcolor}"
        )
        return self.last
