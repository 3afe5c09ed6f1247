"""Factory function for creating audio stores."""

import logging

from relay_service.config import ProviderConfig

from .interface import AudioStore
from .mock import MockAudioStore
from .unconfigured import UnconfiguredAudioStore

logger = logging.getLogger(__name__)


def create_audio_store(config: ProviderConfig) -> AudioStore:
    """Create an audio store instance.

    Raises:
        ValueError: If the store name is unknown
    """
    store = config.audio_store

    if store == "memory":
        return MockAudioStore()

    if store == "local":
        from .local_store import LocalAudioStore

        return LocalAudioStore(config.local_audio_path, config.local_audio_base_url)

    if store == "cloudinary":
        if not config.cloudinary_configured:
            logger.warning("Cloudinary credentials not set, audio storage is unavailable")
            return UnconfiguredAudioStore("CLOUDINARY_CLOUD_NAME/API_KEY/API_SECRET are not set")

        from .cloudinary_store import CloudinaryAudioStore

        return CloudinaryAudioStore(
            cloud_name=config.cloudinary_cloud_name,
            api_key=config.cloudinary_api_key,
            api_secret=config.cloudinary_api_secret,
            folder=config.cloudinary_folder,
            timeout_s=config.timeout_s,
        )

    raise ValueError(f"Unknown audio store: {store}. Supported: cloudinary, local, memory")
