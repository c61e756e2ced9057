"""
Telechargement et enregistrement des images de couverture.

ImageService valide l'URL, telecharge l'image avec httpx, controle son
format et sa taille, puis la re-encode avec Pillow pour retirer les
metadonnees EXIF avant de l'ecrire dans le stockage.

Usage:
    service = ImageService(storage=LocalImageStorage(Path("images")))
    cover = await service.download_and_save(url, MediaType.MOVIES, "42")
"""

import uuid
from io import BytesIO
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import urlparse

import httpx
from loguru import logger
from pathvalidate import sanitize_filename
from PIL import Image, UnidentifiedImageError

from mediaset.core.entities.media import CoverImage
from mediaset.core.ports.images import IImageService, IImageStorage, ImageDownloadError
from mediaset.core.value_objects.media_type import MediaType

# Extension -> (content type, format Pillow)
IMAGE_FORMATS: dict[str, tuple[str, str]] = {
    "jpg": ("image/jpeg", "JPEG"),
    "jpeg": ("image/jpeg", "JPEG"),
    "png": ("image/png", "PNG"),
}

_CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/pjpeg": "jpg",
    "image/png": "png",
}

DEFAULT_MAX_SIZE = 5 * 1024 * 1024  # 5 MB


class ImageService(IImageService):
    """
    Service de recuperation des images de couverture.

    Attributes:
        USER_AGENT: User-Agent des telechargements (certains CDN refusent
            les clients anonymes)
    """

    USER_AGENT = "MediaSet/0.1"

    def __init__(
        self,
        storage: IImageStorage,
        allowed_extensions: Optional[list[str]] = None,
        max_size: int = DEFAULT_MAX_SIZE,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le service.

        Args:
            storage: Stockage cible des fichiers
            allowed_extensions: Extensions acceptees (defaut: jpg, jpeg, png)
            max_size: Taille maximale acceptee en octets
            timeout: Timeout du telechargement en secondes
        """
        self._storage = storage
        self._allowed = {
            ext.lower().lstrip(".") for ext in (allowed_extensions or IMAGE_FORMATS)
        }
        self._max_size = max_size
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self.USER_AGENT},
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    async def download_and_save(
        self, url: str, media_type: MediaType, entity_id: str
    ) -> CoverImage:
        """
        Telecharge une image et l'enregistre pour une entite.

        Args:
            url: URL http(s) de l'image
            media_type: Categorie de l'entite (sous-repertoire de stockage)
            entity_id: ID de l'entite (prefixe du nom de fichier)

        Returns:
            CoverImage decrivant le fichier enregistre

        Raises:
            ImageDownloadError: URL invalide, reponse en erreur, format ou
                taille refuses, image illisible
        """
        self._validate_url(url)

        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ImageDownloadError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ImageDownloadError(url, f"{type(e).__name__}: {e}") from e

        content = response.content
        if not content:
            raise ImageDownloadError(url, "Empty response body")
        if len(content) > self._max_size:
            raise ImageDownloadError(
                url, f"Image too large: {len(content)} bytes (max {self._max_size})"
            )

        extension = self._detect_extension(url, response.headers.get("content-type", ""))
        content_type, image_format = IMAGE_FORMATS[extension]
        data = self._strip_metadata(url, content, image_format)

        safe_id = sanitize_filename(str(entity_id), replacement_text="_") or "entity"
        file_name = f"{safe_id}-{uuid.uuid4().hex}.{extension}"
        relative_path = f"{media_type.slug}/{file_name}"

        try:
            self._storage.save(relative_path, data)
        except OSError as e:
            raise ImageDownloadError(url, f"Storage error: {e}") from e

        logger.info(f"Image enregistree: {relative_path} ({len(data)} octets)")
        return CoverImage(
            file_name=file_name,
            file_path=relative_path,
            content_type=content_type,
            file_size=len(data),
            source_url=url,
        )

    def _validate_url(self, url: str) -> None:
        parsed = urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ImageDownloadError(url, f"Invalid image URL: {url}")

    def _detect_extension(self, url: str, content_type: str) -> str:
        """
        Determine l'extension depuis le chemin de l'URL, sinon depuis le
        Content-Type de la reponse.
        """
        suffix = PurePosixPath(urlparse(url).path).suffix.lower().lstrip(".")
        if suffix in self._allowed and suffix in IMAGE_FORMATS:
            return suffix

        mime = content_type.split(";")[0].strip().lower()
        extension = _CONTENT_TYPE_EXTENSIONS.get(mime)
        if extension and extension in self._allowed:
            return extension

        raise ImageDownloadError(
            url, f"Unsupported image type: {suffix or mime or 'unknown'}"
        )

    def _strip_metadata(self, url: str, content: bytes, image_format: str) -> bytes:
        """Re-encode l'image : les metadonnees (EXIF) ne sont pas recopiees."""
        try:
            with Image.open(BytesIO(content)) as image:
                image.load()
                if image_format == "JPEG" and image.mode not in ("RGB", "L"):
                    image = image.convert("RGB")
                output = BytesIO()
                image.save(output, format=image_format)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise ImageDownloadError(url, f"Invalid image data: {e}") from e
        return output.getvalue()

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
