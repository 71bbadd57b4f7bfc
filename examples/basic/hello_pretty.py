"""Print a configuration term at two widths, with no setup."""

from nickel_pretty import pretty
from nickel_pretty.term import Array, MergePriority, MetaValue, Num, Record, Str
from nickel_pretty.types import NumType

config = Record(
    {
        "name": Str("api"),
        "port": MetaValue(Num(8080), types=NumType(), priority=MergePriority.DEFAULT),
        "hosts": Array((Str("a.example.org"), Str("b.example.org"))),
    }
)

print(pretty(config))
print(pretty(config, width=30))
