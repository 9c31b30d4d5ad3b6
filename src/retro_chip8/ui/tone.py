# retro_chip8/ui/tone.py
"""
サウンドタイマーが非ゼロの間に鳴らすトーンの生成。

QtMultimediaのQAudioSinkをプッシュモードで使い、1フレーム分の正弦波サンプル
(16bit, モノラル)をフレームごとに書き込みます。書き込みを止めると無音になります。
"""
import logging
import math
from array import array

from PySide6.QtMultimedia import QAudioFormat, QAudioSink, QMediaDevices

logger = logging.getLogger(__name__)

class TonePlayer:
    def __init__(self, tone_hz: int = 441, sample_rate: int = 44100, amplitude: int = 28000,
                 frame_hz: int = 60, parent=None):
        self._tone_hz = tone_hz
        self._sample_rate = sample_rate
        self._amplitude = amplitude
        self._samples_per_frame = sample_rate // frame_hz
        self._sample_nr = 0
        self._sink = None
        self._io = None

        device = QMediaDevices.defaultAudioOutput()
        if device.isNull():
            logger.warning("No audio output device available; tone disabled")
            return

        fmt = QAudioFormat()
        fmt.setSampleRate(sample_rate)
        fmt.setChannelCount(1)
        fmt.setSampleFormat(QAudioFormat.SampleFormat.Int16)
        if not device.isFormatSupported(fmt):
            logger.warning("Audio device does not support 16-bit mono at %d Hz; tone disabled", sample_rate)
            return

        self._sink = QAudioSink(device, fmt, parent)
        self._io = self._sink.start()

    @property
    def enabled(self) -> bool:
        return self._io is not None

    # @intent:responsibility 位相を保ったまま1フレーム分のサンプルを生成します。
    def render_frame(self) -> bytes:
        step = 2.0 * math.pi * self._tone_hz / self._sample_rate
        start = self._sample_nr
        samples = array('h', (
            int(self._amplitude * math.sin(step * n)) for n in range(start, start + self._samples_per_frame)
        ))
        self._sample_nr = (start + self._samples_per_frame) % self._sample_rate
        return samples.tobytes()

    def feed(self, sound_on: bool) -> None:
        if self._io is None or not sound_on:
            return
        self._io.write(self.render_frame())

    def stop(self) -> None:
        if self._sink is not None:
            self._sink.stop()
            self._sink = None
            self._io = None
