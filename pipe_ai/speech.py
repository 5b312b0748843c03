import logging

from .errors import SpeechError

logger = logging.getLogger(__name__)


def speak(text: str, rate: float = 1.0):
    """Reads `text` aloud with pyttsx3 (install the `speech` extra)."""
    # Imported here so pipe-ai runs without a speech engine unless --speak is used.
    try:
        import pyttsx3
    except ImportError as e:
        raise SpeechError(
            "No speech engine available. Install it with: pip install 'pipe-ai[speech]'"
        ) from e

    engine = pyttsx3.init()
    base_rate = engine.getProperty("rate") or 200
    engine.setProperty("rate", int(base_rate * max(0.1, float(rate))))
    logger.debug("Speaking the reply")
    engine.say(text)
    engine.runAndWait()
