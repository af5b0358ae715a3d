"""AST nodes for equation definitions."""

from typing import Annotated
from typing import Literal as TypingLiteral

from pydantic import BaseModel, Field


# Terms - using discriminated union for type safety
class Literal(BaseModel):
    type: TypingLiteral["literal"] = "literal"
    value: int = Field(ge=0)


class Reference(BaseModel):
    """Reference to another variable's value (e.g., 'a' in 'b = a + 2')."""

    type: TypingLiteral["reference"] = "reference"
    name: str


Term = Annotated[Literal | Reference, Field(discriminator="type")]


class Expression(BaseModel):
    """Right-hand side of a definition: the sum of its terms."""

    terms: list[Term] = []

    def references(self) -> list[str]:
        """Referenced names in term order (duplicates kept)."""
        return [t.name for t in self.terms if isinstance(t, Reference)]

    def dependencies(self) -> set[str]:
        return set(self.references())


class Module(BaseModel):
    """A parsed definitions file: the definition table."""

    path: str = ""  # file path
    definitions: dict[str, Expression] = {}
