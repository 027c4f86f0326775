"""
FingerTap - Finger tapping assessment from a webcam.

This is the main entry point: it opens the camera, tracks the hand with
MediaPipe and runs one timed trial, then reports the metrics.

Keys (window mode):
    s   start a trial
    x   stop the running trial
    q   quit
"""

import json
import logging
import sys
import threading

import cv2 as cv

from fingertap.config import UIConfig, config
from fingertap.config.args_parser import get_args
from fingertap.core import EventType
from fingertap.session import AssessmentSession

logger = logging.getLogger(__name__)


def log_event(event):
    """Log controller and session events."""
    if event.type == EventType.TAP_DETECTED:
        tap = event.payload
        logger.info(f"Tap at {tap.time} ms (distance {tap.amplitude:.1f})")
    elif event.type == EventType.TRIAL_STARTED:
        logger.info(f"Trial started: {event.payload}")
    elif event.type == EventType.ERROR:
        logger.error(f"Session error: {event.payload}")
    else:
        logger.debug(f"Event: {event.type.value}")


def report(result, as_json=False):
    """
    Print a trial result.

    Args:
        result (TrialResult): Finished trial
        as_json (bool): Print the full result as JSON on stdout
    """
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print(f"Hand:                {result.hand}")
    print(f"Taps:                {result.tap_count}")
    print(f"Frequency:           {result.frequency:.2f} Hz")
    print(f"Amplitude:           {result.amplitude:.1f} % of hand size")
    print(f"Rhythm variability:  {result.rhythm_variability:.1f} %")
    print(f"Amplitude decrement: {result.amplitude_decrement:.1f} %")
    print(f"Duration:            {result.duration / 1000:.1f} s")
    print(f"Valid trial:         {'yes' if result.success else 'no'}")


def run(args):
    """
    Run the assessment loop.

    Returns:
        int: Process exit code
    """
    config.load_args(args)
    session = AssessmentSession(config, camera_port=args.camera)
    session.subscribe(log_event)

    results = []
    completed = threading.Event()

    def on_complete(event):
        if event.type == EventType.TRIAL_COMPLETED:
            results.append(event.payload)
            completed.set()

    session.subscribe(on_complete)

    if not session.init().success:
        return 1

    try:
        if args.headless:
            session.start_trial(args.hand)

        while not completed.is_set():
            step = session.step(draw=not args.headless)

            if args.headless or step is None:
                continue

            image, _ = step
            cv.imshow(UIConfig.WINDOW_NAME, image)
            key = cv.waitKey(1) & 0xFF

            if key == ord('s'):
                outcome = session.start_trial(args.hand)
                if not outcome.success:
                    logger.warning(outcome.error)
            elif key == ord('x'):
                session.stop_trial()
            elif key == ord('q'):
                logger.info("Quit requested")
                break

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        session.destroy()
        if not args.headless:
            cv.destroyAllWindows()

    if not results:
        logger.info("No trial completed")
        return 0

    report(results[-1], as_json=args.json)
    return 0


if __name__ == "__main__":
    args = get_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    sys.exit(run(args))
