"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe MEDIASET_,
et peut optionnellement être fournie via un fichier .env.

Les clés API (TMDB, GiantBomb) sont optionnelles : la recherche de la catégorie
correspondante est désactivée si elles ne sont pas fournies.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mediaset.services.upload.mapper import MalformedCellPolicy

# Fichier .env à la racine du projet (parent de mediaset/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MEDIASET_.
    Exemple : MEDIASET_BACKGROUND_BATCH_SIZE=50

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIASET_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///mediaset.db")

    # Stockage des images
    image_storage_dir: Path = Field(default=Path("data/images"))
    image_max_size_mb: int = Field(default=5, ge=1)
    image_allowed_extensions: list[str] = Field(default=["jpg", "jpeg", "png"])
    image_download_timeout: float = Field(default=30.0, gt=0)

    # Clés API (OPTIONNELLES sauf UPCitemdb qui dispose d'un endpoint d'essai)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_language: str = Field(default="en-US")
    giantbomb_api_key: Optional[str] = Field(default=None)
    upcitemdb_api_key: Optional[str] = Field(default=None)
    musicbrainz_enabled: bool = Field(default=True)
    openlibrary_enabled: bool = Field(default=True)

    # Cache des API
    cache_dir: Path = Field(default=Path(".cache/api"))

    # Enrichissement en arrière-plan
    background_enabled: bool = Field(default=False)
    background_interval_hours: float = Field(default=24, ge=1)
    background_max_runtime_minutes: float = Field(default=60, gt=0)
    background_batch_size: int = Field(default=25, ge=1)
    background_requests_per_minute: int = Field(default=30, ge=1)
    background_workers: int = Field(default=2, ge=1)

    # Import tabulaire
    upload_delimiter: str = Field(default=";", min_length=1, max_length=1)
    upload_malformed_cell_policy: MalformedCellPolicy = Field(
        default=MalformedCellPolicy.DEFAULT
    )

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/mediaset.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("image_storage_dir", "cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @property
    def giantbomb_enabled(self) -> bool:
        """Vérifie si l'API GiantBomb est configurée."""
        return bool(self.giantbomb_api_key)

    @property
    def image_max_size(self) -> int:
        """Taille maximale d'une image en octets."""
        return self.image_max_size_mb * 1024 * 1024
