from typing import List, NamedTuple, Optional


class Sample(NamedTuple):
    """
    One point of the distance signal.
    """

    time: int
    "Milliseconds since the trial started."
    distance: float
    "Normalized thumb-index distance (percent of hand size)."


class SignalBuffer:
    """
    An append-only buffer of (time, distance) samples for one trial.
    Times are kept in two parallel lists so that the signal processing
    functions can consume them directly.
    Sample times must be non-decreasing.
    """

    def __init__(self) -> None:
        self.times: List[int] = []
        "Sample times in milliseconds since trial start."
        self.distances: List[float] = []
        "Normalized distances, aligned with `times`."

    def append(self, time: int, distance: float) -> None:
        """
        Append a sample to the buffer.
        Raises `ValueError` if `time` is negative or earlier than the last sample.
        """
        if time < 0:
            raise ValueError(f"Sample time must be non-negative, got {time}")
        if self.times and time < self.times[-1]:
            raise ValueError(
                f"Sample time {time} is earlier than the last sample ({self.times[-1]})"
            )

        self.times.append(int(time))
        self.distances.append(float(distance))

    def clear(self) -> None:
        """
        Clear the buffer.
        """
        self.times = []
        self.distances = []

    def last(self) -> Optional[Sample]:
        """
        Return the last sample in the buffer.
        """
        if len(self.times) == 0:
            return None
        return Sample(self.times[-1], self.distances[-1])

    def samples(self) -> List[Sample]:
        """
        Return all samples, in append order.
        """
        return [Sample(t, d) for t, d in zip(self.times, self.distances)]

    def __len__(self) -> int:
        return len(self.times)

    def __str__(self) -> str:
        return str(self.samples())

    def __repr__(self) -> str:
        return str(self)
