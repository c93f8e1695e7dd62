"""AssemblyAI implementation of the TranscriptionService interface."""

import asyncio

import aiohttp
from pydantic import ValidationError

from video_transcriber.config import AssemblyAIConfig
from video_transcriber.domain.models import Transcript, TranscriptJob, Utterance
from video_transcriber.exceptions import (
    ConfigError,
    ProviderError,
    ProviderUnreachableError,
    TranscriptionTimeoutError,
)
from video_transcriber.logging import setup_logging

from .interfaces import TranscriptionService

logger = setup_logging()

# Window used for the single cue when the provider returns text without utterances
PLAIN_TEXT_DURATION_MS = 10_000
PLAIN_TEXT_SPEAKER = "A"


class AssemblyAITranscriber(TranscriptionService):
    """Submits audio URLs to AssemblyAI and polls the job until it finishes."""

    def __init__(self, config: AssemblyAIConfig):
        self._config = config
        self._transcript_url = f"{config.base_url.rstrip('/')}/v2/transcript"

    async def transcribe(self, audio_url: str) -> Transcript:
        """
        Transcribes the audio at a URL with speaker diarization.

        The job is asynchronous on AssemblyAI's side: submission returns an id
        immediately, then the job is polled every poll_interval_seconds for at
        most max_poll_attempts polls.
        """
        if not self._config.api_key:
            raise ConfigError("ASSEMBLYAI_API_KEY")

        headers = {"authorization": self._config.api_key}

        try:
            async with aiohttp.ClientSession(headers=headers) as client:
                job = await self._submit(client, audio_url)
                logger.info("AssemblyAI job submitted", extra={"job_id": job.id})
                job = await self._wait_for_completion(client, job.id)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.exception("AssemblyAI request failed")
            raise ProviderUnreachableError(f"AssemblyAI unreachable: {e}", e) from e

        transcript = self._to_transcript(job)
        logger.info(
            "Audio transcription successful",
            extra={"job_id": job.id, "utterance_count": len(transcript.utterances)},
        )
        return transcript

    async def _submit(self, client: aiohttp.ClientSession, audio_url: str) -> TranscriptJob:
        payload = {
            "audio_url": audio_url,
            "speaker_labels": self._config.speaker_labels,
        }
        async with client.post(self._transcript_url, json=payload) as response:
            if response.status >= 400:
                body = await response.text()
                raise ProviderError(f"AssemblyAI submit failed: {body}")
            return self._parse_job(await response.json())

    async def _wait_for_completion(
        self, client: aiohttp.ClientSession, job_id: str
    ) -> TranscriptJob:
        for attempt in range(1, self._config.max_poll_attempts + 1):
            await asyncio.sleep(self._config.poll_interval_seconds)

            async with client.get(f"{self._transcript_url}/{job_id}") as response:
                if response.status >= 400:
                    raise ProviderError(f"AssemblyAI poll failed: {response.status}")
                job = self._parse_job(await response.json())

            logger.info(
                "AssemblyAI status",
                extra={"job_id": job_id, "status": job.status, "attempt": attempt},
            )

            if not job.is_terminal:
                continue
            if job.status == "error":
                raise ProviderError(f"AssemblyAI error: {job.error}")
            return job

        raise TranscriptionTimeoutError(job_id, self._config.max_poll_attempts)

    def _parse_job(self, body: dict) -> TranscriptJob:
        try:
            return TranscriptJob.model_validate(body)
        except ValidationError as e:
            raise ProviderError(f"Unexpected AssemblyAI response: {e}", e) from e

    def _to_transcript(self, job: TranscriptJob) -> Transcript:
        text = job.text or ""
        if job.utterances:
            return Transcript(utterances=tuple(job.utterances), text=text)
        if not text:
            return Transcript()
        return Transcript(
            utterances=(
                Utterance(
                    speaker=PLAIN_TEXT_SPEAKER,
                    text=text,
                    start=0,
                    end=PLAIN_TEXT_DURATION_MS,
                ),
            ),
            text=text,
        )
