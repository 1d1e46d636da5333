"""
Letter Observations

A LetterObservation is one recognized tile: the letter on it plus the rotated
rectangle (OpenCV RotatedRect convention) where it was found in the frame.
Observations are immutable values and can key dicts and sets.
"""

import json
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import cv2
import numpy as np


@dataclass(frozen=True)
class LetterObservation:
    """A detected letter with its rotated-rectangle footprint."""
    letter: str
    center_x: float
    center_y: float
    width: float
    height: float
    angle: float = 0.0  # Degrees, same convention as cv2.minAreaRect

    def __repr__(self):
        return (f"LetterObservation({self.letter}, ({self.center_x},{self.center_y}), "
                f"{self.width}x{self.height}, {self.angle}deg)")

    @property
    def center(self) -> Tuple[float, float]:
        return (self.center_x, self.center_y)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def rotated_rect(self):
        """The footprint as an OpenCV rotated rect: ((cx, cy), (w, h), angle)."""
        return ((self.center_x, self.center_y), (self.width, self.height), self.angle)

    def corners(self) -> np.ndarray:
        """Four corner points (4x2 float32), accounting for rotation."""
        return cv2.boxPoints(self.rotated_rect)

    @classmethod
    def from_rotated_rect(cls, letter: str, rect) -> 'LetterObservation':
        """Build an observation from a cv2.minAreaRect style tuple."""
        (cx, cy), (w, h), angle = rect
        return cls(letter.upper(), float(cx), float(cy), float(w), float(h), float(angle))

    @classmethod
    def from_record(cls, record: dict) -> 'LetterObservation':
        """
        Build an observation from a recognition record.

        Expected shape:
            {"letter": "A",
             "footprint": {"centerX": 5, "centerY": 5, "width": 10,
                           "height": 10, "rotationAngle": 0}}
        """
        try:
            letter = str(record['letter']).upper()
            footprint = record['footprint']
            fields = (
                float(footprint['centerX']),
                float(footprint['centerY']),
                float(footprint['width']),
                float(footprint['height']),
                float(footprint.get('rotationAngle', 0.0)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Malformed observation record {record!r}: {e}") from e

        if len(letter) != 1 or not letter.isalpha():
            raise ValueError(f"Observation letter must be a single letter, got {record['letter']!r}")

        return cls(letter, *fields)

    def to_record(self) -> dict:
        return {
            'letter': self.letter,
            'footprint': {
                'centerX': self.center_x,
                'centerY': self.center_y,
                'width': self.width,
                'height': self.height,
                'rotationAngle': self.angle,
            }
        }


def load_observations(path) -> List[LetterObservation]:
    """
    Load observations from a JSON file.

    The file holds either a list of records or an object with the list under
    "observations" (fixture files also carry layout metadata next to it).
    """
    with open(path, 'r') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('observations', [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of observations in {path}")

    return [LetterObservation.from_record(record) for record in data]


def save_observations(path, observations: Sequence[LetterObservation], **metadata):
    """Save observations (plus optional metadata keys) to a JSON file."""
    data = dict(metadata)
    data['observations'] = [obs.to_record() for obs in observations]
    with open(path, 'w') as f:
        json.dump(data, f, indent=2)


def observations_from_layout(rows: Sequence[str], tile_size: float = 10.0,
                             gap: float = 0.0) -> List[LetterObservation]:
    """
    Place one square tile per letter of an ASCII layout.

    Rows are read top to bottom, '.' or ' ' marks an empty cell. Tiles are
    tile_size wide with `gap` pixels between neighbouring cells, so
    gap=0 gives touching tiles.
    """
    pitch = tile_size + gap
    observations = []
    for row, row_str in enumerate(rows):
        for col, char in enumerate(row_str):
            if char in '. ':
                continue
            center_x = col * pitch + tile_size / 2
            center_y = row * pitch + tile_size / 2
            observations.append(LetterObservation(char.upper(), center_x, center_y,
                                                  tile_size, tile_size, 0.0))
    return observations
