"""Object storage layout for a video's transcription artifacts."""

AUDIO_CONTENT_TYPE = "audio/mpeg"
SUBTITLE_CONTENT_TYPE = "text/vtt"


def video_key(user_id: str, video_id: str) -> str:
    return f"{user_id}/{video_id}/result.mp4"


def staged_audio_key(user_id: str, video_id: str) -> str:
    return f"{user_id}/{video_id}/audio-temp.mp3"


def transcription_key(user_id: str, video_id: str) -> str:
    return f"{user_id}/{video_id}/transcription.vtt"
