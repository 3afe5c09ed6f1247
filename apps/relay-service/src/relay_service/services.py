"""Service container.

Builds every collaborator once from RelayConfig and hands them out
explicitly; nothing below this point reads configuration on its own.
"""

import logging
from dataclasses import dataclass, field

from relay_service.config import RelayConfig
from relay_service.gateway.session import ClientSessionStore
from relay_service.language.detector import LanguageDetector
from relay_service.membership import ConversationMembership
from relay_service.pipeline.channel import FanOutChannel
from relay_service.pipeline.coordinator import DeliveryPipeline
from relay_service.storage.factory import create_audio_store
from relay_service.storage.interface import AudioStore
from relay_service.store.conversations import ConversationStore
from relay_service.store.messages import MessageStore
from relay_service.store.users import UserStore
from relay_service.stt.factory import create_stt_provider
from relay_service.stt.interface import SpeechToTextProvider
from relay_service.translation.factory import create_translation_provider
from relay_service.translation.interface import TranslationProvider
from relay_service.tts.factory import create_tts_provider
from relay_service.tts.interface import TextToSpeechProvider

logger = logging.getLogger(__name__)


@dataclass
class RelayServices:
    """Everything the HTTP API and the realtime gateway need."""

    users: UserStore
    conversations: ConversationStore
    messages: MessageStore
    membership: ConversationMembership
    pipeline: DeliveryPipeline
    channel: FanOutChannel
    translator: TranslationProvider
    stt: SpeechToTextProvider
    tts: TextToSpeechProvider
    audio_store: AudioStore
    sessions: ClientSessionStore = field(default_factory=ClientSessionStore)

    def shutdown(self) -> None:
        """Release provider resources (HTTP clients, SDK handles)."""
        for provider in (self.translator, self.stt, self.tts, self.audio_store):
            shutdown = getattr(provider, "shutdown", None)
            if shutdown is None:
                continue
            try:
                shutdown()
            except Exception as e:
                logger.warning(f"Provider shutdown failed: {type(provider).__name__}: {e}")


def build_services(
    config: RelayConfig,
    translator: TranslationProvider | None = None,
    stt: SpeechToTextProvider | None = None,
    tts: TextToSpeechProvider | None = None,
    audio_store: AudioStore | None = None,
) -> RelayServices:
    """Construct stores, providers and the delivery pipeline.

    Providers not passed in are created from config.providers.
    """
    translator = translator or create_translation_provider(config.providers)
    stt = stt or create_stt_provider(config.providers)
    tts = tts or create_tts_provider(config.providers)
    audio_store = audio_store or create_audio_store(config.providers)

    users = UserStore()
    conversations = ConversationStore()
    messages = MessageStore()
    membership = ConversationMembership(conversations, users)
    channel = FanOutChannel()
    detector = LanguageDetector(min_chars=config.pipeline.detection_min_chars)

    pipeline = DeliveryPipeline(
        membership=membership,
        messages=messages,
        detector=detector,
        translator=translator,
        stt=stt,
        tts=tts,
        audio_store=audio_store,
        channel=channel,
        config=config.pipeline,
    )

    logger.info(
        f"Services built: translation={translator.provider_name}, stt={stt.provider_name}, "
        f"tts={tts.provider_name}, storage={audio_store.provider_name}"
    )

    return RelayServices(
        users=users,
        conversations=conversations,
        messages=messages,
        membership=membership,
        pipeline=pipeline,
        channel=channel,
        translator=translator,
        stt=stt,
        tts=tts,
        audio_store=audio_store,
    )
