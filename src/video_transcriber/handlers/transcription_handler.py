"""Handler that runs the speech-to-text pipeline for one video."""

import asyncio

from video_transcriber.config import AssemblyAIConfig
from video_transcriber.db_models import TranscriptionStatus
from video_transcriber.domain import PipelineResult, VideoContext, format_webvtt
from video_transcriber.domain.object_keys import (
    AUDIO_CONTENT_TYPE,
    SUBTITLE_CONTENT_TYPE,
    staged_audio_key,
    transcription_key,
    video_key,
)
from video_transcriber.exceptions import ConfigError, SourceUnreachableError
from video_transcriber.infrastructure.interfaces import (
    AudioExtractor,
    BucketResolver,
    GenerationTrigger,
    SourceProbe,
    StorageBucket,
    TranscriptionService,
)
from video_transcriber.logging import setup_logging
from video_transcriber.repositories import VideoRepository

logger = setup_logging()


class TranscriptionHandler:
    """
    Orchestrates extraction, transcription and subtitle storage for a video.

    The handler is the only writer of a video's transcription status while a
    run is in flight. A run always leaves the status in a final state:
    COMPLETE, SKIPPED, NO_AUDIO, or unset after a failure.
    """

    def __init__(
        self,
        repository: VideoRepository,
        bucket_resolver: BucketResolver,
        probe: SourceProbe,
        extractor: AudioExtractor,
        transcription_service: TranscriptionService,
        generation_trigger: GenerationTrigger | None,
        config: AssemblyAIConfig,
    ):
        self._repository = repository
        self._bucket_resolver = bucket_resolver
        self._probe = probe
        self._extractor = extractor
        self._transcription_service = transcription_service
        self._generation_trigger = generation_trigger
        self._config = config
        self._background_tasks: set[asyncio.Task] = set()

    async def run(
        self, video_id: str, user_id: str, ai_generation_enabled: bool = False
    ) -> PipelineResult:
        """
        Transcribes a video into a WebVTT track stored next to the video.

        Args:
            video_id: The video to transcribe.
            user_id: Owner prefix of the video's objects in storage.
            ai_generation_enabled: Start AI generation once the track is stored.

        Returns:
            PipelineResult describing the outcome. Errors are never raised;
            a failure after the video was claimed resets its status.
        """
        logger.info(
            "Starting transcription",
            extra={"video_id": video_id, "user_id": user_id},
        )

        if not self._config.api_key:
            error = ConfigError("ASSEMBLYAI_API_KEY")
            logger.error("Transcription not configured", extra={"video_id": video_id})
            return PipelineResult(success=False, message=str(error))

        try:
            context = await asyncio.to_thread(
                self._repository.get_video_context, video_id
            )
        except Exception as e:
            logger.exception("Failed to load video", extra={"video_id": video_id})
            return PipelineResult(success=False, message=str(e))

        if context.transcription_disabled:
            try:
                await self._set_status(video_id, TranscriptionStatus.SKIPPED)
            except Exception as e:
                logger.exception(
                    "Failed to mark video skipped", extra={"video_id": video_id}
                )
                return PipelineResult(success=False, message=str(e))
            return PipelineResult(
                success=True,
                message="Transcription disabled - skipped",
                status=TranscriptionStatus.SKIPPED,
            )

        try:
            await self._set_status(video_id, TranscriptionStatus.PROCESSING)
            return await self._transcribe(context, user_id, ai_generation_enabled)
        except Exception as e:
            logger.exception(
                "Transcription failed",
                extra={"video_id": video_id, "error": str(e)},
            )
            await self._reset_status(video_id)
            return PipelineResult(
                success=False, message=str(e) or "Transcription failed"
            )

    async def wait_for_background_tasks(self) -> None:
        """Waits for fire-and-forget follow-ups started by earlier runs."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)

    async def _transcribe(
        self, context: VideoContext, user_id: str, ai_generation_enabled: bool
    ) -> PipelineResult:
        video_id = context.video_id
        bucket = await asyncio.to_thread(self._bucket_resolver.resolve, context.bucket)

        source_key = video_key(user_id, video_id)
        video_url = await asyncio.to_thread(bucket.get_signed_url, source_key)
        if not await self._probe.is_reachable(video_url):
            raise SourceUnreachableError(source_key)

        if not await self._extractor.has_audio_track(video_url):
            await self._set_status(video_id, TranscriptionStatus.NO_AUDIO)
            logger.info("Video has no audio track", extra={"video_id": video_id})
            return PipelineResult(
                success=True,
                message="Video has no audio track - skipped",
                status=TranscriptionStatus.NO_AUDIO,
            )

        audio = await self._extractor.extract(video_url)

        audio_key = staged_audio_key(user_id, video_id)
        await asyncio.to_thread(bucket.put_object, audio_key, audio, AUDIO_CONTENT_TYPE)
        audio_url = await asyncio.to_thread(bucket.get_signed_url, audio_key)

        transcript = await self._transcription_service.transcribe(audio_url)

        track = format_webvtt(transcript.utterances, transcript.text)
        await asyncio.to_thread(
            bucket.put_object,
            transcription_key(user_id, video_id),
            track.encode("utf-8"),
            SUBTITLE_CONTENT_TYPE,
        )

        await self._set_status(video_id, TranscriptionStatus.COMPLETE)

        await self._delete_staged_audio(bucket, audio_key)

        if ai_generation_enabled:
            self._start_generation(video_id, user_id)

        logger.info(
            "Transcription completed",
            extra={"video_id": video_id, "cue_count": len(transcript.utterances)},
        )
        return PipelineResult(
            success=True,
            message="Transcription completed successfully",
            status=TranscriptionStatus.COMPLETE,
        )

    async def _set_status(self, video_id: str, status: TranscriptionStatus) -> None:
        await asyncio.to_thread(self._repository.update_status, video_id, status)

    async def _reset_status(self, video_id: str) -> None:
        try:
            await asyncio.to_thread(self._repository.update_status, video_id, None)
        except Exception:
            logger.exception(
                "Failed to reset transcription status", extra={"video_id": video_id}
            )

    async def _delete_staged_audio(self, bucket: StorageBucket, audio_key: str) -> None:
        try:
            await asyncio.to_thread(bucket.delete_object, audio_key)
        except Exception as e:
            logger.warning(
                "Failed to cleanup temp audio",
                extra={"object_name": audio_key, "error": str(e)},
            )

    def _start_generation(self, video_id: str, user_id: str) -> None:
        if self._generation_trigger is None:
            logger.info("AI generation not configured", extra={"video_id": video_id})
            return

        task = asyncio.create_task(
            asyncio.to_thread(
                self._generation_trigger.start_generation, video_id, user_id
            )
        )
        self._background_tasks.add(task)
        task.add_done_callback(self._on_generation_done)

    def _on_generation_done(self, task: asyncio.Task) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "AI generation trigger failed",
                extra={"error": str(error)},
                exc_info=error,
            )
