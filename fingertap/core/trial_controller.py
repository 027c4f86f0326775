"""
Trial controller for FingerTap.

The controller owns the lifecycle of assessment trials. While a trial is
recording, every landmark frame is timestamped relative to the trial start
and run through the signal pipeline:

    normalize -> signal buffer -> smooth -> velocity -> detect taps

The smoothed signal, velocity and tap events are recomputed over the whole
buffer each time it grows. When the trial stops, manually or through the
auto-stop timer, the metrics are aggregated into a TrialResult and emitted.

THREADING:
Frames arrive on the caller's thread while the auto-stop timer fires on its
own thread. Every mutation happens under one lock and the RECORDING state is
the gate: whichever of stop / auto-stop runs first completes the trial, the
other is rejected as "no trial in progress". Listeners run outside the lock.

USAGE:
    controller = TrialController(AssessmentConfig(trial_duration_ms=10000))
    controller.subscribe(lambda event: print(event.type, event.payload))

    controller.start("right")
    for frame in frames:            # LandmarkFrame, or None when the hand is lost
        controller.process_frame(frame)
    outcome = controller.stop()     # or let the timer stop it
"""

import logging
import threading
import time
from typing import Callable, List, Optional, Set, Tuple

from fingertap.config import AssessmentConfig, config as default_config
from fingertap.core.results import OK, FrameRecord, OperationResult, TrialResult
from fingertap.core.trial_state import (
    NOT_RECORDING,
    Command,
    EventType,
    TrialEvent,
    TrialState,
    accepts_frames,
    transition,
)
from fingertap.detection import TapDetector, TapEvent
from fingertap.errors import DegenerateHandError
from fingertap.metrics import compute_metrics
from fingertap.processing import moving_average, normalize_frame, velocity
from fingertap.utils import LandmarkFrame, SignalBuffer

logger = logging.getLogger(__name__)

Listener = Callable[[TrialEvent], None]

DESTROYED = "Controller destroyed"


class TrialContext:
    """
    All data of one trial. Created on start and owned by the controller
    until the next start or reset.
    """

    def __init__(self, hand: str, start_time: float) -> None:
        self.hand = hand
        "Hand under assessment."

        self.start_time = start_time
        "Clock reading (seconds) at trial start."

        self.buffer = SignalBuffer()
        "Raw (time, distance) samples."

        self.smoothed: List[float] = []
        "Smoothed distance signal, empty until the buffer fills one window."

        self.velocity: List[float] = []
        "Velocity of the smoothed signal, for diagnostics."

        self.tap_events: List[TapEvent] = []
        "Current tap events, recomputed on every frame."

        self.frame_data: List[FrameRecord] = []
        "Audit record per accepted frame."

        self.announced: Set[Tuple[int, int]] = set()
        "(index, time) of every tap already sent to listeners."

    def elapsed_ms(self, now: float) -> int:
        """
        Milliseconds between the trial start and the clock reading `now`.
        """
        return max(0, int((now - self.start_time) * 1000))

    def unannounced_taps(self) -> List[TapEvent]:
        """
        Return the tap events not sent to listeners yet and mark them announced.
        A tap that only becomes detectable on a later frame is returned even
        when it precedes taps already announced.
        """
        new = [e for e in self.tap_events if (e.index, e.time) not in self.announced]
        self.announced.update((e.index, e.time) for e in new)
        return new


class TrialController:
    """
    State machine gating frame processing, owning trial start / stop /
    auto-stop and producing trial results.
    """

    def __init__(
        self,
        config: Optional[AssessmentConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        """
        :param config: Assessment options. Defaults to the module-level configuration.
        :param clock: Monotonic clock in seconds, used to timestamp frames.
        :param timer_factory: Builds the auto-stop timer, called as `timer_factory(seconds, callback, args=(context,))`.
        """
        self.config = config if config is not None else default_config
        self.detector = TapDetector.from_config(self.config)

        self._clock = clock
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None

        self._lock = threading.Lock()
        self._state = TrialState.IDLE
        self._context: Optional[TrialContext] = None
        self._destroyed = False
        self._listeners: List[Listener] = []

    # ==================== Listeners ====================

    def subscribe(self, listener: Listener) -> Listener:
        """
        Register a callback invoked with every emitted TrialEvent.
        """
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, events: List[TrialEvent]) -> None:
        """
        Deliver events to every listener. A failing listener does not stop the others.
        """
        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception as e:
                    logger.error(f"Listener failed on {event.type.value}: {e}", exc_info=True)

    # ==================== Lifecycle ====================

    @property
    def state(self) -> TrialState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state == TrialState.RECORDING

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def start(self, hand: str = "right") -> OperationResult:
        """
        Start a new trial for `hand`.
        Rejected without touching the running trial if one is already recording.
        """
        with self._lock:
            if self._destroyed:
                return OperationResult(False, DESTROYED)

            step = transition(self._state, Command.START)
            if not step.accepted:
                logger.warning(f"Start rejected: {step.error}")
                return OperationResult(False, step.error)

            self._cancel_timer()
            context = TrialContext(hand.lower(), self._clock())
            self._context = context
            self._state = step.state

            self._timer = self._timer_factory(
                self.config.trial_duration_ms / 1000.0,
                self._on_auto_stop,
                args=(context,),
            )
            self._timer.daemon = True
            self._timer.start()

            events = [TrialEvent(t, {"hand": hand}) for t in step.emitted]

        logger.info(
            f"Trial started for {hand} hand ({self.config.trial_duration_ms} ms)"
        )
        self.emit(events)
        return OK

    def stop(self) -> OperationResult:
        """
        Stop the running trial and return its result.
        """
        return self._finish(Command.STOP)

    def _on_auto_stop(self, context: TrialContext) -> None:
        self._finish(Command.AUTO_STOP, context)

    def _finish(
        self, command: Command, context: Optional[TrialContext] = None
    ) -> OperationResult:
        with self._lock:
            if self._destroyed:
                return OperationResult(False, DESTROYED)

            # a timer armed for an earlier trial never stops a later one
            if context is not None and context is not self._context:
                logger.debug("Auto-stop of a previous trial ignored")
                return OperationResult(False, NOT_RECORDING)

            step = transition(self._state, command)
            if not step.accepted:
                if command == Command.AUTO_STOP:
                    logger.debug("Auto-stop fired after the trial ended, ignoring")
                else:
                    logger.warning(f"Stop rejected: {step.error}")
                return OperationResult(False, step.error)

            self._state = step.state
            if command == Command.STOP:
                self._cancel_timer()
            else:
                self._timer = None

            result = self._build_result(self._context)

        logger.info(
            f"Trial completed ({command.value}): {result.tap_count} taps, "
            f"{result.frequency:.2f} Hz, success={result.success}"
        )
        self.emit([TrialEvent(t, result) for t in step.emitted])
        return OperationResult(True, result=result)

    def reset(self) -> None:
        """
        Discard the current trial, if any, without emitting a result.
        """
        with self._lock:
            if self._destroyed:
                return
            self._cancel_timer()
            self._state = transition(self._state, Command.RESET).state
            self._context = None

        logger.debug("Trial controller reset")

    def destroy(self) -> None:
        """
        Tear the controller down. Later frames, commands and timers are no-ops.
        """
        with self._lock:
            self._destroyed = True
            self._cancel_timer()
            self._context = None
            self._listeners = []

        logger.info("Trial controller destroyed")

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    # ==================== Frame Processing ====================

    def process_frame(self, frame: Optional[LandmarkFrame]) -> bool:
        """
        Handle one tracker output.

        Args:
            frame (LandmarkFrame | None): Tracked hand, or None when no hand was found

        Returns:
            bool: True if the frame was added to the trial signal
        """
        accepted = False

        with self._lock:
            if self._destroyed:
                return False

            if frame is None:
                events = [TrialEvent(EventType.HAND_LOST)]
            else:
                events = [TrialEvent(EventType.HAND_FOUND, frame.handedness)]

                if accepts_frames(self._state):
                    new_taps = self._ingest(self._context, frame)
                    if new_taps is not None:
                        accepted = True
                        events.extend(
                            TrialEvent(EventType.TAP_DETECTED, tap) for tap in new_taps
                        )

        self.emit(events)
        return accepted

    def _ingest(self, ctx: TrialContext, frame: LandmarkFrame) -> Optional[List[TapEvent]]:
        """
        Run one frame through the pipeline. Returns the newly detected taps,
        or None when the frame had to be skipped.
        """
        now_ms = ctx.elapsed_ms(self._clock())

        try:
            sample = normalize_frame(frame)
        except DegenerateHandError as e:
            logger.debug(f"Skipping frame at {now_ms} ms: {e}")
            return None

        ctx.buffer.append(now_ms, sample.distance)
        ctx.frame_data.append(
            FrameRecord(
                timestamp=now_ms,
                normalized_distance=sample.distance,
                hand_size=sample.hand_size,
                thumb_tip=frame.thumb_tip,
                index_tip=frame.index_tip,
            )
        )

        window = self.config.smoothing_window
        if len(ctx.buffer) >= window:
            ctx.smoothed = moving_average(ctx.buffer.distances, window)

            if len(ctx.smoothed) > 1:
                ctx.velocity = velocity(ctx.smoothed, ctx.buffer.times)
                ctx.tap_events = self.detector.detect(ctx.smoothed, ctx.buffer.times)

        return ctx.unannounced_taps()

    def _build_result(self, ctx: TrialContext) -> TrialResult:
        metrics = compute_metrics(
            ctx.tap_events, ctx.smoothed, self.config.min_required_taps
        )
        last = ctx.buffer.last()

        return TrialResult(
            success=metrics.success,
            hand=ctx.hand,
            tap_count=metrics.tap_count,
            frequency=metrics.frequency,
            amplitude=metrics.amplitude,
            rhythm_variability=metrics.rhythm_variability,
            amplitude_decrement=metrics.amplitude_decrement,
            duration=last.time if last is not None else 0,
            tap_events=tuple(ctx.tap_events),
            distance_signal=tuple(ctx.buffer.distances),
            time_signal=tuple(ctx.buffer.times),
            frame_data=tuple(ctx.frame_data),
        )

    # ==================== Signal Views ====================

    def elapsed_ms(self) -> int:
        """
        Milliseconds since the current trial started, 0 when not recording.
        """
        ctx = self._context
        if ctx is None or not self.is_recording:
            return 0
        return ctx.elapsed_ms(self._clock())

    @property
    def tap_events(self) -> List[TapEvent]:
        return list(self._context.tap_events) if self._context else []

    @property
    def distance_signal(self) -> List[float]:
        return list(self._context.buffer.distances) if self._context else []

    @property
    def time_signal(self) -> List[int]:
        return list(self._context.buffer.times) if self._context else []

    @property
    def smoothed_signal(self) -> List[float]:
        return list(self._context.smoothed) if self._context else []

    @property
    def velocity_signal(self) -> List[float]:
        return list(self._context.velocity) if self._context else []
