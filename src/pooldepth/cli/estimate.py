import json
from pathlib import Path

import click
import pydantic
from pydantic import HttpUrl, WebsocketUrl
from web3 import HTTPProvider, IPCProvider, LegacyWebSocketProvider, Web3

from pooldepth.cli import cli
from pooldepth.config import settings
from pooldepth.depth import BatchEstimator, DepthConfig, Side, TokenUnit
from pooldepth.exceptions import PooldepthError
from pooldepth.providers import UniswapV3PoolStateProvider


def _build_web3(endpoint: HttpUrl | WebsocketUrl | Path | str) -> Web3:
    endpoint_str = str(endpoint)
    if endpoint_str.startswith(("http://", "https://")):
        return Web3(HTTPProvider(endpoint_str))
    if endpoint_str.startswith(("ws://", "wss://")):
        return Web3(LegacyWebSocketProvider(endpoint_str))
    return Web3(IPCProvider(Path(endpoint_str).expanduser()))


def _resolve_web3(rpc_uri: str | None, chain_id: int | None) -> Web3:
    if rpc_uri is not None:
        return _build_web3(rpc_uri)

    if chain_id is None:
        raise click.UsageError("Provide an endpoint with --rpc or a configured --chain-id.")

    try:
        return _build_web3(settings.rpc[chain_id])
    except KeyError:
        raise click.ClickException(
            f"No RPC endpoint is configured for chain ID {chain_id}."
        ) from None


@cli.command()
@click.option(
    "--pool",
    "pools",
    multiple=True,
    required=True,
    help="Pool address. Repeat for each request.",
)
@click.option(
    "--offset",
    "offsets",
    multiple=True,
    required=True,
    type=click.IntRange(min=0),
    help="Square root price offset in Q64.96 units. Repeat once per pool.",
)
@click.option(
    "--side",
    type=click.Choice([side.value for side in Side]),
    default=Side.BOTH.value,
    show_default=True,
)
@click.option(
    "--unit",
    type=click.Choice([unit.value for unit in TokenUnit]),
    default=TokenUnit.TOKEN0.value,
    show_default=True,
)
@click.option("--rpc", "rpc_uri", default=None, help="HTTP, websocket or IPC endpoint.")
@click.option("--chain-id", type=int, default=None, help="Use the endpoint configured for a chain.")
@click.option("--block", "block_number", type=int, default=None, help="Read state at this block.")
@click.option("--json", "as_json", is_flag=True, help="Print the amounts as a JSON list.")
def estimate(  # noqa: PLR0913
    pools: tuple[str, ...],
    offsets: tuple[int, ...],
    side: str,
    unit: str,
    rpc_uri: str | None,
    chain_id: int | None,
    block_number: int | None,
    as_json: bool,  # noqa: FBT001
) -> None:
    """
    Estimate the amount needed to move each pool's price by its offset.
    """

    provider = UniswapV3PoolStateProvider(
        w3=_resolve_web3(rpc_uri, chain_id),
        block_number=block_number,
    )
    config = DepthConfig(side=Side(side), unit=TokenUnit(unit))

    try:
        amounts = BatchEstimator(provider).estimate(
            pools=pools,
            offsets=offsets,
            configs=[config] * len(pools),
        )
    except PooldepthError as exc:
        raise click.ClickException(exc.message or str(exc)) from exc
    except pydantic.ValidationError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(amounts))
        return

    for pool, offset, amount in zip(pools, offsets, amounts, strict=True):
        click.echo(f"{pool} offset={offset} {side} {unit}: {amount}")
