"""Recipe instructions carried alongside meals."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RecipeSection:
    """A titled group of preparation steps."""

    title: str = ""
    subtitle: str = ""
    steps: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RecipeGuide:
    """Prepare, cook, and weigh-and-assemble instructions."""

    prepare: list[RecipeSection] = field(default_factory=list)
    cook: list[RecipeSection] = field(default_factory=list)
    weight_assemble: list[RecipeSection] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.prepare or self.cook or self.weight_assemble)
