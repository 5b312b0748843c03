import sys
import unittest
from unittest.mock import MagicMock, patch

from pipe_ai.errors import SpeechError
from pipe_ai.speech import speak


class TestSpeak(unittest.TestCase):
    def test_missing_engine_is_reported_with_install_hint(self):
        with patch.dict(sys.modules, {"pyttsx3": None}):
            with self.assertRaises(SpeechError) as cm:
                speak("hello")
        self.assertIn("pipe-ai[speech]", str(cm.exception))

    def test_speaks_with_pyttsx3(self):
        pyttsx3 = MagicMock()
        engine = pyttsx3.init.return_value
        engine.getProperty.return_value = 200

        with patch.dict(sys.modules, {"pyttsx3": pyttsx3}):
            speak("hello", rate=1.5)

        engine.setProperty.assert_called_once_with("rate", 300)
        engine.say.assert_called_once_with("hello")
        engine.runAndWait.assert_called_once()
