"""
Stand-ins for the clock, the auto-stop timer, the camera and the tracker.
"""


class FakeClock:
    """Manually advanced monotonic clock, in seconds."""

    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance_ms(self, ms):
        self.now += ms / 1000.0


class FakeTimer:
    """
    Records the auto-stop timer instead of running it.
    `fire()` runs the callback unless cancelled; `fire(force=True)` runs it
    anyway, like a timer thread that already fired when cancel() was called.
    """

    created = []

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self, force=False):
        if self.cancelled and not force:
            return
        self.function(*self.args, **self.kwargs)


class FakeCamera:
    """Returns the same image on every read."""

    def __init__(self, image, ok=True, capture_fps=0.0):
        self.image = image
        self.ok = ok
        self.capture_fps = capture_fps
        self.released = False

    def read(self):
        if not self.ok:
            return False, None
        return True, self.image.copy()

    def release(self):
        self.released = True


class ScriptedTracker:
    """Returns pre-built LandmarkFrames (or None) in order, then None."""

    def __init__(self, frames):
        self.frames = list(frames)
        self.closed = False
        self.skeletons_drawn = 0

    def process(self, image):
        if not self.frames:
            return None
        return self.frames.pop(0)

    def draw_landmarks(self, image):
        self.skeletons_drawn += 1
        return image

    def close(self):
        self.closed = True
