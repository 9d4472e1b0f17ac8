"""ASR transcription using faster-whisper."""

import time
from typing import Optional, Protocol

import numpy as np

from whispr.config.config_loader import config
from whispr.utils.exceptions import ASRError
from whispr.utils.logger import setup_logger

logger = setup_logger(__name__)

NATIVE_SAMPLE_RATE = 16000


class Recognizer(Protocol):
    """Anything that turns 16 kHz mono float32 audio into text."""

    def transcribe(self, signal: np.ndarray, sample_rate: int, language: str) -> str:
        ...


class ASRTranscriber:
    """Handles speech-to-text transcription with a lazily loaded Whisper model."""

    def __init__(
        self,
        model_name: Optional[str] = None,
        device: Optional[str] = None,
        compute_type: Optional[str] = None,
        beam_size: Optional[int] = None,
    ) -> None:
        """Initialize the ASR transcriber.

        Args:
            model_name: faster-whisper model name or local path.
            device: "auto", "cpu" or "cuda".
            compute_type: CTranslate2 compute type.
            beam_size: Beam size, 1 for greedy decoding.
        """
        self.model_name = model_name or config.get("asr.model", "base.en")
        self.device = device or config.get("asr.device", "auto")
        self.compute_type = compute_type or config.get("asr.compute_type", "int8")
        self.beam_size = beam_size or config.get("asr.beam_size", 1)
        self.model = None

        logger.info(f"ASRTranscriber initialized with model: {self.model_name}")

    def load_model(self) -> None:
        """Load the Whisper model into memory with progress indication."""
        if self.model is not None:
            logger.debug("Model already loaded in memory")
            return

        from faster_whisper import WhisperModel
        from tqdm import tqdm

        logger.info(f"Loading model: {self.model_name} ({self.device})")
        start = time.time()
        try:
            with tqdm(total=1, desc="Loading model", bar_format="{desc}: {bar}") as pbar:
                self.model = WhisperModel(
                    self.model_name,
                    device=self.device,
                    compute_type=self.compute_type,
                )
                pbar.update(1)
        except Exception as e:
            raise ASRError(f"Failed to load model {self.model_name}: {e}") from e

        logger.info(f"Model loaded in {time.time() - start:.1f}s")

    def unload_model(self) -> None:
        """Release the model."""
        if self.model is not None:
            self.model = None
            logger.info("ASR model unloaded")

    def transcribe(self, signal: np.ndarray, sample_rate: int, language: str) -> str:
        """Transcribe mono audio.

        Args:
            signal: Mono float32 samples at ``sample_rate``.
            sample_rate: Must be 16000.
            language: Language hint such as "en".

        Returns:
            Recognized text, possibly empty.

        Raises:
            ASRError: If the rate is wrong or the engine fails.
        """
        if sample_rate != NATIVE_SAMPLE_RATE:
            raise ASRError(
                f"Recognizer expects {NATIVE_SAMPLE_RATE}Hz audio, got {sample_rate}Hz"
            )
        if signal.size == 0:
            logger.warning("🟡 Empty audio, nothing to transcribe")
            return ""

        self.load_model()
        if self.model is None:
            raise ASRError("ASR model is not loaded")

        start = time.time()
        try:
            segments, _info = self.model.transcribe(
                signal.astype(np.float32, copy=False),
                language=language,
                task="transcribe",
                beam_size=self.beam_size,
                best_of=1,
                temperature=0.0,
                condition_on_previous_text=False,
            )
            # 'segments' is a generator; join on the fly
            text = " ".join(
                seg.text.strip() for seg in segments if seg.text.strip()
            ).strip()
        except Exception as e:
            raise ASRError(f"Transcription failed: {e}") from e

        logger.info(
            f"Transcribed {signal.size / sample_rate:.2f}s of audio "
            f"in {time.time() - start:.2f}s"
        )
        return text
