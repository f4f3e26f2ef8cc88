"""Minimal GraphQL document builder.

Queries are assembled as small trees of selections and argument values and
rendered in one place, so literal values are always quoted and escaped the
same way. Only the constructs the query templates need are modelled.
"""

from dataclasses import dataclass, field

INDENT = "  "

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_string(value: str) -> str:
    """Escape text for use inside a GraphQL string literal."""
    out = []
    for char in value:
        if char in _ESCAPES:
            out.append(_ESCAPES[char])
        elif ord(char) < 0x20:
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(char)
    return "".join(out)


@dataclass(frozen=True)
class StringValue:
    value: str

    def render(self) -> str:
        return f'"{escape_string(self.value)}"'


@dataclass(frozen=True)
class IntValue:
    value: int

    def render(self) -> str:
        return str(int(self.value))


@dataclass(frozen=True)
class EnumValue:
    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class ObjectValue:
    """Input object literal, rendered inline as ``{ key: value, ... }``."""

    fields: tuple[tuple[str, "Value"], ...]

    def render(self) -> str:
        body = ", ".join(f"{key}: {value.render()}" for key, value in self.fields)
        return f"{{ {body} }}"


Value = StringValue | IntValue | EnumValue | ObjectValue


@dataclass(frozen=True)
class Argument:
    name: str
    value: Value

    def render(self) -> str:
        return f"{self.name}: {self.value.render()}"


@dataclass(frozen=True)
class Selection:
    """A field selection with optional arguments and nested selections."""

    name: str
    arguments: tuple[Argument, ...] = ()
    children: tuple["Selection", ...] = field(default=())

    def render(self, depth: int = 0) -> list[str]:
        """Render as indented lines.

        A selection with an empty name (an unresolved concept) is not
        emitted: its arguments are dropped and its children are rendered in
        its place.
        """
        if not self.name:
            lines: list[str] = []
            for child in self.children:
                lines.extend(child.render(depth))
            return lines

        pad = INDENT * depth
        head = self.name
        if self.arguments:
            head += "(" + ", ".join(arg.render() for arg in self.arguments) + ")"

        if not self.children:
            return [pad + head]

        lines = [f"{pad}{head} {{"]
        for child in self.children:
            lines.extend(child.render(depth + 1))
        lines.append(pad + "}")
        return lines


@dataclass(frozen=True)
class Query:
    """An anonymous ``query { ... }`` operation."""

    selections: tuple[Selection, ...]

    def render(self) -> str:
        lines = ["query {"]
        for selection in self.selections:
            lines.extend(selection.render(1))
        lines.append("}")
        return "\n".join(lines) + "\n"
