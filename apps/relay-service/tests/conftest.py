"""Shared test fixtures for relay service tests.

Provides in-memory stores, mock capability providers and a factory for
DeliveryPipeline instances wired to them.
"""

import base64
from unittest.mock import MagicMock

import pytest

from relay_service.config import (
    ObservabilityConfig,
    PipelineConfig,
    ProviderConfig,
    RelayConfig,
    ServerConfig,
)
from relay_service.language.detector import LanguageDetector
from relay_service.membership import ConversationMembership
from relay_service.pipeline.channel import FanOutChannel
from relay_service.pipeline.coordinator import DeliveryPipeline
from relay_service.storage.mock import MockAudioStore
from relay_service.store.conversations import ConversationStore
from relay_service.store.messages import MessageStore
from relay_service.store.users import UserStore
from relay_service.stt.mock import MockSpeechToText
from relay_service.translation.mock import MockTranslator
from relay_service.tts.mock import MockTextToSpeech

# =============================================================================
# Audio Fixtures
# =============================================================================

SAMPLE_AUDIO = b"RIFF\x24\x00\x00\x00WAVEfmt " + b"\x00\x01" * 32


@pytest.fixture
def sample_audio_bytes() -> bytes:
    return SAMPLE_AUDIO


@pytest.fixture
def sample_audio_base64() -> str:
    """Raw base64 (no data URI)."""
    return base64.b64encode(SAMPLE_AUDIO).decode("ascii")


@pytest.fixture
def sample_audio_data_uri(sample_audio_base64: str) -> str:
    """Base64 data URI with a MIME parameter, as browsers record it."""
    return f"data:audio/webm;codecs=opus;base64,{sample_audio_base64}"


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def mock_provider_config() -> ProviderConfig:
    return ProviderConfig(
        translation_provider="mock",
        stt_provider="mock",
        tts_provider="mock",
        audio_store="memory",
    )


@pytest.fixture
def relay_config(mock_provider_config: ProviderConfig) -> RelayConfig:
    return RelayConfig(
        server=ServerConfig(),
        providers=mock_provider_config,
        pipeline=PipelineConfig(detection_min_chars=3, default_language="en", parallel_recipients=True),
        observability=ObservabilityConfig(log_level="INFO", log_format="json"),
    )


# =============================================================================
# Store and Membership Fixtures
# =============================================================================


@pytest.fixture
def users() -> UserStore:
    return UserStore()


@pytest.fixture
def conversations() -> ConversationStore:
    return ConversationStore()


@pytest.fixture
def messages() -> MessageStore:
    return MessageStore()


@pytest.fixture
def membership(conversations: ConversationStore, users: UserStore) -> ConversationMembership:
    return ConversationMembership(conversations, users)


# =============================================================================
# Provider Fixtures
# =============================================================================


@pytest.fixture
def translator() -> MockTranslator:
    return MockTranslator()


@pytest.fixture
def stt() -> MockSpeechToText:
    return MockSpeechToText(transcript="Mujhe coffee chahiye", language="hi")


@pytest.fixture
def tts() -> MockTextToSpeech:
    return MockTextToSpeech()


@pytest.fixture
def audio_store() -> MockAudioStore:
    return MockAudioStore()


@pytest.fixture
def channel() -> FanOutChannel:
    return FanOutChannel()


@pytest.fixture
def fixed_detector():
    """Detector stub that always answers with the fallback language."""
    detector = MagicMock(spec=LanguageDetector)
    detector.detect.side_effect = lambda text, fallback: fallback
    return detector


# =============================================================================
# Pipeline Factory
# =============================================================================


@pytest.fixture
def make_pipeline(membership, messages, translator, stt, tts, audio_store, channel):
    """Build a DeliveryPipeline over the shared fixtures; keyword overrides win."""

    def _make(**overrides) -> DeliveryPipeline:
        parts = {
            "membership": membership,
            "messages": messages,
            "detector": LanguageDetector(),
            "translator": translator,
            "stt": stt,
            "tts": tts,
            "audio_store": audio_store,
            "channel": channel,
            "config": PipelineConfig(
                detection_min_chars=3, default_language="en", parallel_recipients=True
            ),
        }
        parts.update(overrides)
        return DeliveryPipeline(**parts)

    return _make


@pytest.fixture
async def hi_en_direct(users: UserStore, membership: ConversationMembership):
    """DIRECT conversation between U1 (hi) and U2 (en). Returns (conversation, u1, u2)."""
    u1 = await users.create(name="U1", preferred_language="hi", user_id="u1")
    u2 = await users.create(name="U2", preferred_language="en", user_id="u2")
    conversation, _ = await membership.get_or_create_direct(u1.id, u2.id)
    return conversation, u1, u2


@pytest.fixture
async def three_member_group(users: UserStore, membership: ConversationMembership):
    """GROUP with a (hi, admin), b (en), c (ta). Returns (conversation, [a, b, c])."""
    a = await users.create(name="A", preferred_language="hi", user_id="a")
    b = await users.create(name="B", preferred_language="en", user_id="b")
    c = await users.create(name="C", preferred_language="ta", user_id="c")
    conversation = await membership.create_group(a.id, "Trio", [b.id, c.id])
    return conversation, [a, b, c]
