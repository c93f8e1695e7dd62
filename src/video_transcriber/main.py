"""
Video Transcriber Service.

Consumes 'video.transcription.requested' events and, for each video:
- Extracts its audio locally (ffmpeg) or through the media server.
- Transcribes it with AssemblyAI speaker diarization.
- Stores a speaker-tagged WebVTT track next to the video in object storage.
- Records the outcome in the video's transcription status.
"""

from ddtrace import patch_all

from video_transcriber.logging import setup_logging

logger = setup_logging()
patch_all()


def main():
    """Starts the video transcriber worker."""
    from video_transcriber.dependencies import get_worker

    logger.info("Starting video-transcriber service")
    worker = get_worker()
    worker.start()


if __name__ == "__main__":
    main()
