"""WebVTT subtitle track generation from speaker utterances."""

import re
from collections.abc import Sequence

from .models import Utterance

WEBVTT_HEADER = "WEBVTT"
FALLBACK_CUE_END_MS = 10_000

_TIMING_RE = re.compile(
    r"^(\d{2,}):(\d{2}):(\d{2})\.(\d{3}) --> (\d{2,}):(\d{2}):(\d{2})\.(\d{3})$"
)
_VOICE_RE = re.compile(r"^<v Speaker ([^>]*)>(.*)$")


def format_time(ms: int) -> str:
    """Formats milliseconds as HH:MM:SS.mmm. Hours are not capped at 99."""
    hours = ms // 3_600_000
    minutes = (ms // 60_000) % 60
    seconds = (ms // 1000) % 60
    millis = ms % 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def format_webvtt(utterances: Sequence[Utterance], fallback_text: str = "") -> str:
    """
    Builds a WebVTT track with one speaker-tagged cue per utterance.

    Args:
        utterances: Utterances in playback order.
        fallback_text: Plain transcript used when there are no utterances.

    Returns:
        The subtitle track text.
    """
    lines = [WEBVTT_HEADER, ""]

    if not utterances:
        lines.append(f"{format_time(0)} --> {format_time(FALLBACK_CUE_END_MS)}")
        lines.append(fallback_text)
        return "\n".join(lines)

    for utterance in utterances:
        lines.append(f"{format_time(utterance.start)} --> {format_time(utterance.end)}")
        lines.append(f"<v Speaker {utterance.speaker}>{utterance.text}")
        lines.append("")

    return "\n".join(lines)


def _to_ms(hours: str, minutes: str, seconds: str, millis: str) -> int:
    return (
        int(hours) * 3_600_000 + int(minutes) * 60_000 + int(seconds) * 1000 + int(millis)
    )


def parse_webvtt(track: str) -> list[Utterance]:
    """
    Reads speaker-tagged cues back out of a track written by format_webvtt.

    Cues without a voice tag are skipped.
    """
    lines = track.split("\n")
    if not lines or lines[0] != WEBVTT_HEADER:
        raise ValueError("Not a WebVTT track")

    utterances: list[Utterance] = []
    index = 1
    while index < len(lines):
        timing = _TIMING_RE.match(lines[index])
        index += 1
        if not timing or index >= len(lines):
            continue
        voice = _VOICE_RE.match(lines[index])
        if not voice:
            continue

        # Cue text runs until the blank line that ends the cue
        text_lines = [voice.group(2)]
        index += 1
        while index < len(lines) and lines[index]:
            text_lines.append(lines[index])
            index += 1

        groups = timing.groups()
        utterances.append(
            Utterance(
                speaker=voice.group(1),
                text="\n".join(text_lines),
                start=_to_ms(*groups[:4]),
                end=_to_ms(*groups[4:]),
            )
        )
    return utterances
