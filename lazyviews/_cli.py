import typing as ty

import click

from lazyviews._version import version
from lazyviews.join import join_where
from lazyviews.product import cartesian_product
from lazyviews.sources import uniform


def _parse_number(text: str) -> ty.Union[int, float]:
    try:
        return int(text)
    except ValueError:
        return float(text)


def _split(value: str, numeric: bool = False) -> ty.List[ty.Any]:
    """Splits a comma separated argument, optionally into numbers."""
    items = [item.strip() for item in value.split(",") if item.strip()]
    if not numeric:
        return items
    try:
        return list(map(_parse_number, items))
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a list of numbers.")


def _number(ctx, param, value: str) -> ty.Union[int, float]:
    try:
        return _parse_number(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a number.")


def _format(elem: ty.Any) -> str:
    if isinstance(elem, tuple):
        return " ".join(map(str, elem))
    return str(elem)


@click.group()
@click.option("--quiet", is_flag=True, help="Do not print the banner.")
def lazyviews(quiet):
    """Evaluate lazy sequence views from the command line."""
    if not quiet:
        title = "lazyviews"
        underline = "-" * len(title)
        version_str = f"version: {version}"
        title_fmt = click.style(title, fg="green")
        click.echo(f"\n{title_fmt}\n{underline}\n{version_str}\n")


@lazyviews.command()
@click.argument("sequences", nargs=-1, required=True)
@click.option("--count", is_flag=True, help="Only print the number of tuples.")
def product(sequences, count):
    """Prints the cartesian product of comma separated SEQUENCES. The
    first sequence varies fastest.
    """
    if len(sequences) < 2:
        raise click.BadParameter(
            "at least two sequences are needed.", param_hint="SEQUENCES"
        )
    view = cartesian_product(*map(_split, sequences))
    if count:
        click.echo(len(view))
        return
    for combination in view:
        click.echo(_format(combination))


@lazyviews.command()
@click.argument("seq-a")
@click.argument("seq-b")
@click.option("--sort-b", is_flag=True, help="Sort SEQ_B before joining.")
@click.option(
    "--numeric", is_flag=True, help="Compare elements as numbers, not text."
)
def join(seq_a, seq_b, sort_b, numeric):
    """Joins comma separated SEQ_A and SEQ_B on equal elements. SEQ_B
    must be sorted, unless --sort-b is passed.
    """
    data_a = _split(seq_a, numeric)
    data_b = _split(seq_b, numeric)
    if sort_b:
        data_b = sorted(data_b)

    def identity(x):
        return x

    view = join_where(
        data_a, data_b, identity, identity, lambda a, b: (a, b), check_sorted=True
    )
    for pair in view:
        click.echo(_format(pair))


@lazyviews.command(name="random")
@click.argument("low", callback=_number)
@click.argument("high", callback=_number)
@click.option("--amount", default=10, show_default=True, type=click.IntRange(min=0))
@click.option("--seed", default=None, type=int, help="Seed for the generator.")
def random_(low, high, amount, seed):
    """Prints AMOUNT uniform random numbers between LOW and HIGH,
    inclusive. Integers are drawn if both bounds are integers.
    """
    try:
        view = uniform(low, high, amount=amount, seed=seed)
    except ValueError as e:
        raise click.BadParameter(str(e))
    for value in view:
        click.echo(value)
