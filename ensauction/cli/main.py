"""
ensauction CLI - Command Line Interface for the name auction engine

Offline commands (hashing, validation, sealing) plus a demo auction run
against the in-memory ledger. Names without the root suffix are
qualified with it.
"""

import sys

import click

from ensauction.core.config import load_config
from ensauction.core.errors import EnsAuctionError
from ensauction.utils.logger import setup_logging, get_logger

logger = get_logger("cli")


def _fail(ctx, message: str) -> None:
    """Report an error and exit 1 (silently in quiet mode)."""
    if not ctx.obj["quiet"]:
        click.echo(message, err=True)
    ctx.exit(1)


def _qualify(ctx, name: str) -> str:
    if not name:
        _fail(ctx, "This command requires a name")
    return ctx.obj["validator"].qualify(name)


def _amount(ctx, text: str, what: str) -> int:
    from ensauction.utils.units import parse_amount

    try:
        return parse_amount(text)
    except ValueError as e:
        _fail(ctx, f"Invalid {what}: {e}")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("-q", "--quiet", is_flag=True, help="No output; exit code only")
@click.option("--env-file", default=None, help="dotenv file with ENSAUCTION_* settings")
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx, debug, quiet, env_file):
    """Manage sealed-bid name auctions"""
    import logging

    from ensauction.core.names import NameValidator

    config = load_config(env_file)
    level = logging.DEBUG if debug else getattr(logging, config.log_level)
    setup_logging(level=level, log_dir=config.log_dir, log_to_file=config.log_to_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["quiet"] = quiet
    ctx.obj["validator"] = NameValidator(config)


# =============================================================================
# Name Commands
# =============================================================================


@cli.command("hash")
@click.argument("name")
@click.pass_context
def hash_cmd(ctx, name):
    """Obtain the namehash of a name"""
    from ensauction.core.names import name_hash, normalize

    try:
        node = name_hash(normalize(_qualify(ctx, name)))
    except EnsAuctionError as e:
        _fail(ctx, e.message)
        return
    if not ctx.obj["quiet"]:
        click.echo(node.hex())


@cli.command("labelhash")
@click.argument("label")
@click.pass_context
def labelhash_cmd(ctx, label):
    """Obtain the hash of a single label"""
    from ensauction.core.names import label_hash, normalize_label

    try:
        digest = label_hash(normalize_label(label))
    except EnsAuctionError as e:
        _fail(ctx, e.message)
        return
    if not ctx.obj["quiet"]:
        click.echo(digest.hex())


@cli.command("normalize")
@click.argument("name")
@click.pass_context
def normalize_cmd(ctx, name):
    """Print the normalized form of a name"""
    from ensauction.core.names import normalize

    try:
        normalized = normalize(name)
    except EnsAuctionError as e:
        _fail(ctx, e.message)
        return
    if not ctx.obj["quiet"]:
        click.echo(normalized)


@cli.command("check")
@click.argument("name")
@click.pass_context
def check_cmd(ctx, name):
    """Check a name against the length policy (exit 0 if valid)"""
    validator = ctx.obj["validator"]
    name = _qualify(ctx, name)
    try:
        validator.validate(name)
    except EnsAuctionError as e:
        _fail(ctx, e.message)
        return
    if not ctx.obj["quiet"]:
        click.echo(f"{validator.canonical(name)} is valid")


# =============================================================================
# Bid Commands
# =============================================================================


@cli.command("seal")
@click.argument("name")
@click.option("-a", "--address", "bidder", required=True, help="Address doing the bidding")
@click.option("-b", "--bid", "bid_text", default="0.01 Ether", help="Bid price for the name")
@click.option("-m", "--mask", "mask_text", default=None, help="Amount sent with the bid (at least the bid)")
@click.option("-s", "--salt", default="", help="Memorable phrase needed when revealing the bid")
@click.pass_context
def seal_cmd(ctx, name, bidder, bid_text, mask_text, salt):
    """Compute the sealed bid and deposit for a name"""
    from ensauction.core.auction import check_bid_inputs, compute_seal, deposit_for
    from ensauction.crypto import bytes_to_hex, normalize_address
    from ensauction.utils.units import format_amount

    validator = ctx.obj["validator"]
    name = _qualify(ctx, name)
    value = _amount(ctx, bid_text, "bid price")
    mask = _amount(ctx, mask_text, "mask") if mask_text else None

    try:
        check_bid_inputs(bidder, value, salt)
        label = validator.registrar_label(validator.canonical(name))
        seal = compute_seal(label, normalize_address(bidder), value, salt)
        deposit = deposit_for(value, mask)
    except EnsAuctionError as e:
        _fail(ctx, e.message)
        return

    if not ctx.obj["quiet"]:
        click.echo(f"Sealed bid is {bytes_to_hex(seal)}")
        click.echo(f"Deposit is {format_amount(deposit)}")


# =============================================================================
# Demo Command
# =============================================================================


@cli.command("demo")
@click.option("--name", default="verylongname.eth", help="Name to auction")
@click.pass_context
def demo(ctx, name):
    """Run a complete auction against an in-memory ledger"""
    from ensauction.core.engine import AuctionEngine
    from ensauction.core.ledger.memory import InMemoryLedger
    from ensauction.utils.units import format_amount

    config = ctx.obj["config"]
    clock = {"now": 1_500_000_000}
    now = lambda: clock["now"]  # noqa: E731

    alice = "0x" + "aa" * 20
    bob = "0x" + "bb" * 20
    ether = 10**18

    with AuctionEngine(InMemoryLedger(config, now), config, now) as engine:
        try:
            click.echo(f"{name}: {engine.state(name)}")

            engine.bid(name, alice, 1 * ether, "alice secret", mask=3 * ether)
            engine.bid(name, bob, 2 * ether, "bob secret")
            click.echo(f"Two sealed bids placed; {name}: {engine.state(name)}")

            clock["now"] += config.total_auction_length - config.reveal_period
            click.echo(f"{name}: {engine.state(name)}")
            for bidder, value, salt in ((alice, 1 * ether, "alice secret"), (bob, 2 * ether, "bob secret")):
                outcome = engine.reveal(name, bidder, value, salt)
                click.echo(
                    f"  {bidder} revealed {format_amount(value)} "
                    f"(leading: {outcome.leading}, refund: {format_amount(outcome.refund)})"
                )

            clock["now"] += config.reveal_period
            result = engine.finalizer.result(name)
            click.echo(f"{name}: {engine.state(name)}; winner {result.winner} pays {format_amount(result.price)}")

            engine.finish(name)
            click.echo(f"{name}: {engine.state(name)}")
        except EnsAuctionError as e:
            logger.error(f"Demo failed: {e.message}")
            _fail(ctx, e.message)


def main():
    cli(obj={})


if __name__ == "__main__":
    sys.exit(main())
