from typing import Optional, Sequence

from showcase.models.models import PhotoSlot


class PhotoCarousel:
    """Index navigation over a vehicle's photos, wrapping at both ends."""

    def __init__(self, photos: Sequence):
        self.photos = list(photos)
        self.index = 0

    def __len__(self) -> int:
        return len(self.photos)

    @property
    def current(self) -> Optional[object]:
        return self.photos[self.index] if self.photos else None

    def next(self):
        if self.photos:
            self.index = (self.index + 1) % len(self.photos)
        return self.current

    def previous(self):
        if self.photos:
            self.index = (self.index - 1 + len(self.photos)) % len(self.photos)
        return self.current

    def select(self, index: int):
        if not 0 <= index < len(self.photos):
            raise IndexError(f"No photo at position {index}")
        self.index = index
        return self.current

    def caption(self) -> str:
        if not self.photos:
            return "No photos available"
        photo_type = _photo_type(self.current)
        try:
            label = PhotoSlot(photo_type).label
        except ValueError:
            label = str(photo_type)
        return f"{self.index + 1} of {len(self.photos)} - {label}"


def _photo_type(photo):
    if isinstance(photo, dict):
        return photo.get("photo_type")
    return getattr(photo, "photo_type", None)
