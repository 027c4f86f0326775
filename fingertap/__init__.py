"""
FingerTap - Webcam finger tapping motor assessment

Turns tracked hand landmarks into clinical finger tapping metrics: tap count,
frequency, amplitude, rhythm variability and amplitude decrement.

Main components:
- config: Defaults and per-session configuration
- utils: Landmark points and the trial signal buffer
- processing: Hand-size normalization, smoothing, velocity
- detection: Dual-method tap detection
- metrics: Trial-level metric aggregation
- core: Trial state machine, controller and results
- tracking, capture, ui: MediaPipe tracker, webcam and overlay adapters
- session: Live assessment session wiring the above
"""

__version__ = "1.0.0"
