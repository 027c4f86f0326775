from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Sequence, Tuple


class HandLandmark(IntEnum):
    """
    Indices of the hand landmarks read by the assessment, in the 21-point
    MediaPipe hand model.
    """

    WRIST = 0
    THUMB_TIP = 4
    INDEX_TIP = 8
    MIDDLE_MCP = 9


@dataclass(frozen=True)
class Point3D:
    """
    Class to represent a landmark position in normalized image coordinates.
    `x` and `y` are in [0, 1] relative to the image size, `z` is the tracker's
    relative depth, on roughly the same scale as `x`.
    Instances are immutable.
    """

    x: float
    "X coordinate (fraction of the image width)."
    y: float
    "Y coordinate (fraction of the image height)."
    z: float = 0.0
    "Relative depth."

    @classmethod
    def from_landmark(cls, landmark: Any) -> "Point3D":
        """
        Build a point from any object exposing `x`, `y` and `z` attributes,
        such as a MediaPipe `NormalizedLandmark`.
        """
        return cls(float(landmark.x), float(landmark.y), float(getattr(landmark, "z", 0.0)))

    def planar_distance_px(self, other: "Point3D", width: float, height: float) -> float:
        """
        Returns the Euclidean distance in pixels between the two points, ignoring depth.
        """
        dx = (self.x - other.x) * width
        dy = (self.y - other.y) * height
        return float((dx**2 + dy**2) ** 0.5)

    def distance_px(
        self, other: "Point3D", width: float, height: float, depth_scale: float
    ) -> float:
        """
        Returns the 3D Euclidean distance in pixels between the two points.
        The depth difference is scaled by `depth_scale * width`.
        """
        dx = (self.x - other.x) * width
        dy = (self.y - other.y) * height
        dz = (self.z - other.z) * width * depth_scale
        return float((dx**2 + dy**2 + dz**2) ** 0.5)

    def to_pixels(self, width: float, height: float) -> Tuple[int, int]:
        """
        Returns the point as integer pixel coordinates, for drawing.
        """
        return int(self.x * width), int(self.y * height)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


@dataclass(frozen=True)
class LandmarkFrame:
    """
    One tracked hand, reduced to the four keypoints the assessment reads,
    together with the pixel size of the image it was detected in.
    """

    wrist: Point3D
    thumb_tip: Point3D
    index_tip: Point3D
    middle_mcp: Point3D

    image_width: int
    "Width in pixels of the source image."
    image_height: int
    "Height in pixels of the source image."

    handedness: Optional[str] = None
    "Hand label reported by the tracker ('Left' / 'Right'), when known."

    @classmethod
    def from_landmarks(
        cls,
        landmarks: Sequence[Any],
        image_width: int,
        image_height: int,
        handedness: Optional[str] = None,
    ) -> "LandmarkFrame":
        """
        Build a frame from a full 21-point landmark list.

        :param landmarks: Landmarks indexed as in the MediaPipe hand model.
        :param image_width: Width in pixels of the image the landmarks refer to.
        :param image_height: Height in pixels of the image the landmarks refer to.
        :param handedness: Optional hand label.
        """
        if len(landmarks) <= max(HandLandmark):
            raise ValueError(
                f"Expected at least {max(HandLandmark) + 1} landmarks, got {len(landmarks)}"
            )

        return cls(
            wrist=Point3D.from_landmark(landmarks[HandLandmark.WRIST]),
            thumb_tip=Point3D.from_landmark(landmarks[HandLandmark.THUMB_TIP]),
            index_tip=Point3D.from_landmark(landmarks[HandLandmark.INDEX_TIP]),
            middle_mcp=Point3D.from_landmark(landmarks[HandLandmark.MIDDLE_MCP]),
            image_width=int(image_width),
            image_height=int(image_height),
            handedness=handedness,
        )
