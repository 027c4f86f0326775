import argparse

from .config import CameraConfig

fingertap_parser = argparse.ArgumentParser(
    description="FingerTap - webcam finger tapping motor assessment"
)

fingertap_parser.add_argument(
    "--camera", help="Camera port to open.", type=int, default=0
)
fingertap_parser.add_argument(
    "--hand",
    help="Hand under assessment.",
    choices=["left", "right"],
    default="right",
)
fingertap_parser.add_argument(
    "--duration",
    help="Trial duration in seconds.",
    type=float,
    default=None,
)
fingertap_parser.add_argument(
    "--min-taps",
    help="Minimum taps for a successful trial.",
    type=int,
    default=None,
)
fingertap_parser.add_argument(
    "--width", help="Capture width.", type=int, default=CameraConfig.DEFAULT_WIDTH
)
fingertap_parser.add_argument(
    "--height", help="Capture height.", type=int, default=CameraConfig.DEFAULT_HEIGHT
)

fingertap_parser.add_argument(
    "--headless",
    help="Run without a display window; the trial starts immediately.",
    action="store_true",
    default=False,
)
fingertap_parser.add_argument(
    "--json",
    help="Print the trial result as JSON on stdout.",
    action="store_true",
    default=False,
)
fingertap_parser.add_argument(
    "--debug",
    help="Enable debug logging.",
    action="store_true",
    default=False,
)

get_args = fingertap_parser.parse_args
