from enum import IntEnum


class LossKind(IntEnum):
    SQUARE = 0
    LOGISTIC = 1
    LOG = 2
    HINGE = 3
    SQUARED_HINGE = 4
    CROSS_ENTROPY = 5

    @classmethod
    def from_name(cls, name: str) -> "LossKind":
        """
        Parse "squared_hinge", "SQUARED_HINGE" or "SquaredHinge" style names.
        """
        key = name.strip().replace("-", "_")
        if key.upper() in cls.__members__:
            return cls[key.upper()]
        # CamelCase loss names, as reported by Loss.name()
        folded = key.replace("_", "").lower()
        for member in cls:
            if member.name.replace("_", "").lower() == folded:
                return member
        raise ValueError(f"Unknown loss kind: {name}")
