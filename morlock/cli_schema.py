"""
CLI output contracts.

Every JSON-emitting CLI in morlock declares a contract: a schema tag, the
markdown doc describing it and the JSON Schema file validating it. ``--schema``
prints the three as one line:

    morlock-bench.v1 docs/bench_schema.md docs/schemas/bench_schema.json
"""

from __future__ import annotations

from dataclasses import dataclass


def _check_token(name: str, s: str) -> str:
    # a token is non-empty and contains no whitespace at all
    if not isinstance(s, str):
        raise TypeError(f"{name} must be str, got {type(s).__name__}")
    if s == "":
        raise ValueError(f"{name} must be non-empty")
    if any(ch.isspace() for ch in s):
        raise ValueError(f"{name} must not contain whitespace: {s!r}")
    return s


@dataclass(frozen=True, slots=True)
class CliContract:
    tag: str
    doc_md: str
    schema_json: str

    def __post_init__(self) -> None:
        _check_token("tag", self.tag)
        _check_token("doc_md", self.doc_md)
        _check_token("schema_json", self.schema_json)

    def line(self) -> str:
        """Single-line triplet without a trailing newline."""
        return f"{self.tag} {self.doc_md} {self.schema_json}"

    @classmethod
    def parse(cls, line: str) -> "CliContract":
        """
        Strict parser for a triplet line, as printed by ``--schema``.

        One trailing newline is tolerated. Extra fields, doubled separators
        and stray whitespace are rejected with ValueError.
        """
        if not isinstance(line, str):
            raise TypeError(f"line must be str, got {type(line).__name__}")
        s = line[:-1] if line.endswith("\n") else line
        parts = s.split(" ")
        if len(parts) != 3:
            raise ValueError(f"expected exactly 3 fields separated by single spaces: {line!r}")
        return cls(*parts)


BENCH_CONTRACT = CliContract(
    tag="morlock-bench.v1",
    doc_md="docs/bench_schema.md",
    schema_json="docs/schemas/bench_schema.json",
)
