class PositiveValue:
    """
    Value Object universal: entero validado con invariante (valor > 0).
    Se usa, por ejemplo, para dimensionar pools de workers.
    """

    def __init__(self, value: int):
        if value <= 0:
            raise ValueError("Must be positive")
        self.value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PositiveValue) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"PositiveValue({self.value})"
