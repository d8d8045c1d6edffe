class RegressionPlaygroundError(Exception):
    """Base class for errors raised by the point store and preset catalog."""


class IndexOutOfRange(RegressionPlaygroundError, IndexError):

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Point index {index} out of range for {length} point(s)")
        self.index = index
        self.length = length


class UnknownPreset(RegressionPlaygroundError, KeyError):

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown preset: {self.name!r}"
