import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from soundtype import DEFAULT_FILENAME, SoundTypeEngine
from soundtype.music import DEFAULT_PRESET_ID, UnknownPreset
from soundtype.output import PyAudioOutput


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="[%(asctime)s] %(levelname)s:%(name)s: %(message)s",
    )


async def _play(engine: SoundTypeEngine, text: str, preset_id: str) -> None:
    await engine.play_text(text, preset_id)
    # let the last note ring out before the stream closes
    await asyncio.sleep(engine.catalog.get(preset_id).envelope.duration)


async def _render(engine: SoundTypeEngine, text: str, preset_id: str, path: Path) -> None:
    audio = await engine.download_audio(text, preset_id, filename=path.name)
    if audio is None:
        logging.getLogger("soundtype").info("No text on stdin, nothing written.")
        return
    path.write_bytes(audio.data)


def main() -> None:
    load_dotenv()
    configure_logging()
    log = logging.getLogger("soundtype")

    mode = os.getenv("SOUNDTYPE_MODE", "render")
    if mode not in ("render", "play"):
        raise RuntimeError("Set SOUNDTYPE_MODE to 'render' or 'play'.")
    preset_id = os.getenv("SOUNDTYPE_PRESET", DEFAULT_PRESET_ID)
    path = Path(os.getenv("SOUNDTYPE_OUTPUT", DEFAULT_FILENAME))
    text = sys.stdin.read().rstrip("\n")

    engine = SoundTypeEngine(output=PyAudioOutput() if mode == "play" else None)
    try:
        if mode == "play":
            asyncio.run(_play(engine, text, preset_id))
        else:
            asyncio.run(_render(engine, text, preset_id, path))
    except UnknownPreset:
        log.exception("Failed to render melody")
        raise SystemExit(1)
    except KeyboardInterrupt:
        log.info("Shutting down SoundType.")
    finally:
        engine.close()


if __name__ == "__main__":
    main()
