from __future__ import annotations

from rich.color_triplet import ColorTriplet


PALETTE: tuple[ColorTriplet, ...] = (
    # pastels
    ColorTriplet(224, 224, 224),
    ColorTriplet(255, 153, 153),
    ColorTriplet(255, 204, 153),
    ColorTriplet(255, 255, 153),
    ColorTriplet(204, 255, 153),
    ColorTriplet(153, 255, 153),
    ColorTriplet(153, 255, 204),
    ColorTriplet(153, 255, 255),
    ColorTriplet(153, 204, 255),
    ColorTriplet(153, 153, 255),
    ColorTriplet(204, 153, 255),
    ColorTriplet(255, 153, 255),

    # saturated
    ColorTriplet(255, 102, 102),
    ColorTriplet(255, 178, 102),
    ColorTriplet(255, 255, 102),
    ColorTriplet(178, 255, 102),
    ColorTriplet(102, 255, 102),
    ColorTriplet(102, 255, 178),
    ColorTriplet(102, 255, 255),
    ColorTriplet(102, 178, 255),
    ColorTriplet(102, 102, 255),
    ColorTriplet(178, 102, 255),
    ColorTriplet(255, 102, 255),
    ColorTriplet(255, 102, 178),

    # light
    ColorTriplet(255, 204, 204),
    ColorTriplet(255, 229, 204),
    ColorTriplet(255, 255, 204),
    ColorTriplet(229, 255, 204),
    ColorTriplet(204, 255, 204),
    ColorTriplet(204, 255, 229),
    ColorTriplet(204, 255, 255),
    ColorTriplet(204, 229, 255),
    ColorTriplet(204, 204, 255),
    ColorTriplet(229, 204, 255),
    ColorTriplet(255, 204, 255),
    ColorTriplet(255, 204, 229),

    # overflow
    ColorTriplet(255, 255, 255),
)


class ColorPicker:
    """
    Class to hand out a color for each log file, cycling through PALETTE in the
    order that file names are first seen. Once a file name has been given a color,
    it keeps that color until reset() is called.
    """
    def __init__(self, palette: tuple[ColorTriplet, ...] = PALETTE):
        self.palette = palette
        self._color_index = -1
        self._color_map: dict[str, ColorTriplet] = {}

    def get(self, file_name: str) -> ColorTriplet:
        if file_name in self._color_map:
            return self._color_map[file_name]

        self._color_index += 1
        color = self.palette[self._color_index % len(self.palette)]
        self._color_map[file_name] = color
        return color

    def reset(self) -> None:
        self._color_index = -1
        self._color_map = {}

    def color_table(self) -> dict[str, ColorTriplet]:
        # dicts keep insertion order, so this is also assignment order
        return dict(self._color_map)

    def __contains__(self, file_name: str) -> bool:
        return file_name in self._color_map

    def __len__(self) -> int:
        return len(self._color_map)
