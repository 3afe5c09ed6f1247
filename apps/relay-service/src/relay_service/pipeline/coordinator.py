"""Delivery pipeline.

Takes one inbound text or voice message through source detection,
per-recipient translation and synthesis, persistence and fan-out.

Failure policy is all-or-nothing per send:
1. every per-recipient branch (translate, synthesize, upload) is staged first
2. rows are written only after every branch succeeded
3. events are published only after every row was written

A failure in step 1 leaves no rows and no events. A persistence failure in
step 2 keeps the rows already written (no compensating delete) and
publishes nothing. Either way the sender gets one SendAck carrying the
stage tag and the trace id.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from relay_service.audio import AudioPayload, parse_audio_base64
from relay_service.config import PipelineConfig
from relay_service.errors import (
    PersistenceError,
    ProviderError,
    RelayError,
    SttError,
    StorageError,
    TranslationError,
    TtsError,
    ValidationError,
)
from relay_service.language.codes import normalize_code
from relay_service.language.detector import LanguageDetector
from relay_service.membership import ConversationMembership
from relay_service.models.conversation import Member
from relay_service.models.error import ErrorCode, ErrorStage
from relay_service.models.message import (
    Message,
    MessageEvent,
    MessageKind,
    OutboundEvent,
    SendAck,
)
from relay_service.observability.logger import bind_send_context, get_logger
from relay_service.observability.metrics import (
    record_event_emitted,
    record_send_failure,
    record_send_success,
    record_stage_timing,
)
from relay_service.storage.interface import AudioStore
from relay_service.store.messages import MessageStore
from relay_service.stt.interface import SpeechToTextProvider
from relay_service.translation.interface import TranslationProvider
from relay_service.tts.interface import TextToSpeechProvider

from .channel import FanOutChannel
from .state import SendState, SendTrace

T = TypeVar("T")


@dataclass(frozen=True)
class StagedDelivery:
    """Per-recipient output held until every branch of the send succeeded."""

    member: Member
    translated_text: str
    translated_audio: AudioPayload | None = None
    translated_audio_url: str | None = None


@dataclass(frozen=True)
class SourceContent:
    """Shared source side of a send: text, language and (voice) original audio URL."""

    text: str
    language: str
    original_audio_url: str | None = None


class DeliveryPipeline:
    """Orchestrates one send from validation to fan-out.

    All collaborators are injected; the pipeline never reads configuration
    or environment on its own. Blocking provider calls run in worker
    threads so concurrent sends and recipient branches do not block the
    event loop.
    """

    def __init__(
        self,
        membership: ConversationMembership,
        messages: MessageStore,
        detector: LanguageDetector,
        translator: TranslationProvider,
        stt: SpeechToTextProvider,
        tts: TextToSpeechProvider,
        audio_store: AudioStore,
        channel: FanOutChannel,
        config: PipelineConfig | None = None,
    ):
        self._membership = membership
        self._messages = messages
        self._detector = detector
        self._translator = translator
        self._stt = stt
        self._tts = tts
        self._audio_store = audio_store
        self._channel = channel
        self._config = config or PipelineConfig()

        self.logger = get_logger(__name__)

    @property
    def channel(self) -> FanOutChannel:
        return self._channel

    async def send_text(
        self,
        conversation_id: str | None,
        sender_id: str | None,
        text: str | None,
    ) -> SendAck:
        """Deliver a text message to every member of the conversation.

        Returns:
            SendAck with one message id per member, or the failure tag
        """
        trace = SendTrace(kind=MessageKind.TEXT, conversation_id=conversation_id, sender_id=sender_id)
        logger = bind_send_context(
            self.logger, trace.trace_id, conversation_id, sender_id, kind="text"
        )
        logger.info("send_started")

        try:
            body = text.strip() if isinstance(text, str) else ""
            if not body:
                raise ValidationError("text is required")
            self._require_ids(conversation_id, sender_id)
            await self._membership.require_member(conversation_id, sender_id)
            trace.transition_to(SendState.VALIDATED)

            members = await self._membership.members_of(conversation_id)
            trace.transition_to(SendState.MEMBERS_RESOLVED)

            fallback = self._sender_language(members, sender_id)
            source = SourceContent(text=body, language=self._detector.detect(body, fallback))
            trace.transition_to(SendState.SOURCE_READY)
            logger.info("source_resolved", source_language=source.language, members=len(members))

            async def stage(member: Member) -> StagedDelivery:
                translated = await self._translate(source, member.preferred_language, trace)
                return StagedDelivery(member=member, translated_text=translated)

            staged = await self._fan_out(members, stage)
            trace.transition_to(SendState.STAGED)

            return await self._commit(trace, source, staged, logger)

        except RelayError as e:
            return self._fail(trace, e, logger)
        except Exception as e:
            logger.exception("send_unexpected_error", error=str(e))
            return self._fail(trace, RelayError(str(e) or None, code=ErrorCode.INTERNAL_ERROR), logger)

    async def send_voice(
        self,
        conversation_id: str | None,
        sender_id: str | None,
        audio_base64: str | None,
    ) -> SendAck:
        """Deliver a voice message: transcribe once, then translate, synthesize
        and upload per member.

        Returns:
            SendAck with one message id per member, or the failure tag
        """
        trace = SendTrace(kind=MessageKind.VOICE, conversation_id=conversation_id, sender_id=sender_id)
        logger = bind_send_context(
            self.logger, trace.trace_id, conversation_id, sender_id, kind="voice"
        )
        logger.info("send_started")

        try:
            audio = parse_audio_base64(audio_base64)
            self._require_ids(conversation_id, sender_id)
            await self._membership.require_member(conversation_id, sender_id)
            trace.transition_to(SendState.VALIDATED)
            logger.info("audio_received", mime_type=audio.mime_type, size_bytes=audio.size)

            sender_language = (
                await self._membership.preferred_language_of(sender_id)
                or self._config.default_language
            )

            original_url = await self._call(
                ErrorStage.STORAGE_ORIGINAL,
                StorageError,
                trace,
                self._audio_store.upload,
                audio,
                f"original_{trace.trace_id}",
            )
            logger.info("original_audio_stored", url=original_url)

            transcription = await self._call(
                ErrorStage.STT, SttError, trace, self._stt.transcribe, audio, sender_language
            )
            transcript = (transcription.transcript or "").strip()
            language = normalize_code(transcription.language) or self._detector.detect(
                transcript, sender_language
            )
            source = SourceContent(text=transcript, language=language, original_audio_url=original_url)
            trace.transition_to(SendState.SOURCE_READY)
            logger.info(
                "transcription_completed",
                source_language=language,
                provider_language=transcription.language,
                transcript_chars=len(transcript),
            )

            members = await self._membership.members_of(conversation_id)
            trace.transition_to(SendState.MEMBERS_RESOLVED)

            async def stage(member: Member) -> StagedDelivery:
                target = member.preferred_language
                translated = await self._translate(source, target, trace)
                synthesized = await self._call(
                    ErrorStage.TTS, TtsError, trace, self._tts.synthesize, translated, target
                )
                url = None
                if synthesized is not None:
                    url = await self._call(
                        ErrorStage.STORAGE_TRANSLATED,
                        StorageError,
                        trace,
                        self._audio_store.upload,
                        synthesized,
                        f"translated_{trace.trace_id}_{member.user_id}",
                    )
                return StagedDelivery(
                    member=member,
                    translated_text=translated,
                    translated_audio=synthesized,
                    translated_audio_url=url,
                )

            staged = await self._fan_out(members, stage)
            trace.transition_to(SendState.STAGED)

            return await self._commit(trace, source, staged, logger)

        except RelayError as e:
            return self._fail(trace, e, logger)
        except Exception as e:
            logger.exception("send_unexpected_error", error=str(e))
            return self._fail(trace, RelayError(str(e) or None, code=ErrorCode.INTERNAL_ERROR), logger)

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    async def _translate(self, source: SourceContent, target_language: str, trace: SendTrace) -> str:
        # Same language: the original is the translation, no provider call
        if normalize_code(target_language) == normalize_code(source.language):
            return source.text
        if not source.text.strip():
            return ""
        return await self._call(
            ErrorStage.TRANSLATION,
            TranslationError,
            trace,
            self._translator.translate,
            source.text,
            target_language,
            source.language,
        )

    async def _fan_out(
        self,
        members: list[Member],
        branch: Callable[[Member], Awaitable[StagedDelivery]],
    ) -> list[StagedDelivery]:
        """Run one branch per member; results keep member order.

        In parallel mode the first failing branch wins and the others are
        cancelled.
        """
        if not self._config.parallel_recipients or len(members) < 2:
            return [await branch(member) for member in members]

        tasks = [asyncio.ensure_future(branch(member)) for member in members]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

    async def _commit(
        self,
        trace: SendTrace,
        source: SourceContent,
        staged: list[StagedDelivery],
        logger: Any,
    ) -> SendAck:
        rows = await self._persist(trace, source, staged, logger)
        trace.transition_to(SendState.PERSISTED)

        await self._emit(trace, rows, staged)
        trace.transition_to(SendState.EMITTED)

        trace.transition_to(SendState.ACKNOWLEDGED)
        record_send_success(trace.kind.event_kind, trace.elapsed_ms, len(rows))
        logger.info(
            "send_completed",
            rows=len(rows),
            elapsed_ms=trace.elapsed_ms,
            stage_timings_ms=trace.stage_timings_ms,
        )
        return SendAck(ok=True, trace_id=trace.trace_id, message_ids=[row.id for row in rows])

    async def _persist(
        self,
        trace: SendTrace,
        source: SourceContent,
        staged: list[StagedDelivery],
        logger: Any,
    ) -> list[Message]:
        start = time.perf_counter()
        rows: list[Message] = []
        for delivery in staged:
            row = Message(
                conversation_id=trace.conversation_id,
                sender_id=trace.sender_id,
                recipient_id=delivery.member.user_id,
                kind=trace.kind,
                original_text=source.text,
                translated_text=delivery.translated_text,
                source_language=source.language,
                target_language=delivery.member.preferred_language,
                original_audio_url=source.original_audio_url,
                translated_audio_url=delivery.translated_audio_url,
                trace_id=trace.trace_id,
            )
            try:
                rows.append(await self._messages.insert(row))
            except RelayError:
                raise
            except Exception as e:
                # Rows already written stay; nothing is emitted for this send
                logger.warning(
                    "persistence_partial_failure",
                    rows_written=len(rows),
                    rows_expected=len(staged),
                    error=str(e),
                )
                raise PersistenceError(
                    f"Failed to persist message row: {e}",
                    details={"rows_written": len(rows), "rows_expected": len(staged)},
                ) from e

        self._record_timing(trace, "persistence", start)
        return rows

    async def _emit(self, trace: SendTrace, rows: list[Message], staged: list[StagedDelivery]) -> None:
        for row, delivery in zip(rows, staged):
            audio_base64 = (
                delivery.translated_audio.to_base64() if delivery.translated_audio else None
            )
            event = MessageEvent.from_message(row, audio_base64=audio_base64)
            await self._channel.publish(
                OutboundEvent(
                    room=row.conversation_id,
                    event=row.kind.event_name,
                    payload=event.to_wire(),
                    trace_id=trace.trace_id,
                )
            )
            record_event_emitted(row.kind.event_kind)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _call(
        self,
        stage: ErrorStage,
        error_cls: type[ProviderError],
        trace: SendTrace,
        func: Callable[..., T],
        *args: Any,
    ) -> T:
        """Run a blocking provider call in a worker thread.

        Errors are tagged with the stage; anything that is not already a
        RelayError is wrapped in error_cls.
        """
        start = time.perf_counter()
        try:
            result = await asyncio.to_thread(func, *args)
        except RelayError as e:
            e.stage = stage
            raise
        except Exception as e:
            raise error_cls(
                f"{stage.value} failed: {e}",
                stage=stage,
                details={"exception_type": type(e).__name__},
            ) from e
        finally:
            self._record_timing(trace, stage.value.split(":")[0], start)
        return result

    def _record_timing(self, trace: SendTrace, stage: str, start: float) -> None:
        duration_ms = int((time.perf_counter() - start) * 1000)
        trace.add_timing(stage, duration_ms)
        record_stage_timing(stage, duration_ms)

    def _sender_language(self, members: list[Member], sender_id: str) -> str:
        for member in members:
            if member.user_id == sender_id:
                return member.preferred_language
        return self._config.default_language

    @staticmethod
    def _require_ids(conversation_id: str | None, sender_id: str | None) -> None:
        if not conversation_id:
            raise ValidationError("conversationId is required")
        if not sender_id:
            raise ValidationError("senderId is required")

    def _fail(self, trace: SendTrace, error: RelayError, logger: Any) -> SendAck:
        trace.fail(error.stage)
        stage = error.stage.value if error.stage else "unknown"
        record_send_failure(trace.kind.event_kind, stage, error.code.value)
        logger.warning(
            "send_failed",
            stage=stage,
            code=error.code.value,
            retryable=error.retryable,
            error=error.message,
            details=error.details,
            elapsed_ms=trace.elapsed_ms,
        )
        return SendAck(
            ok=False,
            trace_id=trace.trace_id,
            error=error.message,
            code=error.code.value,
            stage=error.stage,
            retryable=error.retryable,
        )
