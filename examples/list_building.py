"""Compare growing a list one element at a time against pre-sizing it.

Run with:
    quickbench run examples/list_building.py
    quickbench run examples/list_building.py -a 1000000 -r 3
"""

from quickbench import GroupContext, benchmark
from quickbench.harness import GroupBuilder

DEFAULT_ITERATIONS = 10_000_000


class ListBuilding:
    """Each benchmark leaves its list in ``result`` for check() to validate."""

    iterations = DEFAULT_ITERATIONS
    result: list[str] | None = None

    @staticmethod
    def init(argv):
        if argv:
            ListBuilding.iterations = int(argv[0])

    @staticmethod
    def reset():
        ListBuilding.result = None

    @staticmethod
    def check():
        result = ListBuilding.result
        if result is None or len(result) != ListBuilding.iterations:
            raise AssertionError("benchmark did not build the expected list")

    @benchmark
    @staticmethod
    def simple():
        items = []
        for _ in range(ListBuilding.iterations):
            items.append("hello")
        ListBuilding.result = items

    @benchmark
    @staticmethod
    def right_sizing():
        items = [None] * ListBuilding.iterations
        for i in range(ListBuilding.iterations):
            items[i] = "hello"
        ListBuilding.result = items

    @benchmark
    @staticmethod
    def comprehension():
        ListBuilding.result = ["hello" for _ in range(ListBuilding.iterations)]


# The same comparison for string joining, declared with a builder instead.
joining = GroupBuilder("StringJoining")


@joining.init
def _init(ctx: GroupContext, argv):
    ctx.count = int(argv[0]) if argv else 100_000


@joining.check
def _check(ctx: GroupContext):
    if len(ctx.result) != 5 * ctx.count:
        raise AssertionError("joined string has the wrong length")


@joining.benchmark
def concatenate(ctx: GroupContext):
    text = ""
    for _ in range(ctx.count):
        text += "hello"
    ctx.result = text


@joining.benchmark
def join(ctx: GroupContext):
    ctx.result = "".join("hello" for _ in range(ctx.count))

