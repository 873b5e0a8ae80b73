"""
Contract Bindings - Main Entry Point
Generate bindings from compiled artifacts, deploy and inspect contracts
"""

import argparse
import asyncio
import sys
from pathlib import Path
from loguru import logger

from bindings import ContractInterface, ReadOnlyProvider, Signer, contract_at
from codegen import find_artifacts, load_artifact, write_binding
from contracts import mock_core
from utils.config import load_settings
from utils.rpc_manager import RPCManager


def configure_logging(level: str = 'INFO', log_file: str = None):
    """Console sink plus optional rotating file sink"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )


def cmd_generate(args, settings) -> int:
    """Write binding modules for one artifact or a whole build directory"""
    source = Path(args.source or settings.artifacts_dir)
    out_dir = args.out or settings.bindings_dir

    paths = find_artifacts(source) if source.is_dir() else [source]
    if not paths:
        logger.error(f"No artifacts found in {source}")
        return 1

    for path in paths:
        write_binding(path, out_dir)

    logger.info(f"Generated {len(paths)} binding(s) in {out_dir}")
    return 0


def _describe(interface: ContractInterface):
    logger.info(f"{interface.name}: {len(interface.function_names)} functions, {len(interface.event_names)} events")
    for selector, signature in interface.selectors.items():
        logger.info(f"  {selector}  {signature}")
    for event_name in interface.event_names:
        if interface.get_event(event_name).get('anonymous'):
            logger.info(f"  event {event_name}  (anonymous)")
        else:
            logger.info(f"  event {event_name}  topic {interface.event_topic(event_name)}")


async def cmd_inspect(args, settings) -> int:
    """Print an interface; with --address, read the no-argument view functions"""
    if args.artifact:
        artifact = load_artifact(args.artifact)
        interface = ContractInterface(artifact.abi, name=artifact.name)
    else:
        interface = mock_core.create_interface()

    _describe(interface)

    if not args.address:
        return 0

    w3 = RPCManager.from_settings(settings).get_web3()
    handle = contract_at(args.address, interface, ReadOnlyProvider(w3))

    for entry in interface.abi:
        if entry.get('type') != 'function' or entry.get('inputs'):
            continue
        if entry.get('stateMutability') not in ('view', 'pure'):
            continue
        value = await handle.call(entry['name'])
        logger.info(f"  {entry['name']}() = {value.hex() if isinstance(value, bytes) else value}")

    return 0


async def cmd_deploy(args, settings) -> int:
    """Deploy MockCore through the configured signer"""
    w3 = RPCManager.from_settings(settings).get_web3()
    signer = Signer.from_settings(w3, settings)

    options = {}
    if args.gas:
        options['gas'] = args.gas

    pending = await mock_core.factory(signer).deploy(options=options)
    handle = await pending.deployed(timeout=settings.receipt_timeout)

    logger.success(f"MockCore address: {handle.address}")
    logger.success(f"Transaction hash: {pending.tx_hash.hex()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Contract binding toolkit")
    parser.add_argument('--config', help="JSON config file")
    subparsers = parser.add_subparsers(dest='command', required=True)

    generate = subparsers.add_parser('generate', help="Generate bindings from artifacts")
    generate.add_argument('source', nargs='?', help="Artifact file or build directory")
    generate.add_argument('--out', help="Output package directory")

    inspect = subparsers.add_parser('inspect', help="Show an interface, optionally query a deployment")
    inspect.add_argument('--artifact', help="Artifact to inspect (default: MockCore)")
    inspect.add_argument('--address', help="Deployed contract address")

    deploy = subparsers.add_parser('deploy', help="Deploy MockCore")
    deploy.add_argument('--gas', type=int, help="Gas limit (default: estimate)")

    return parser


async def main(argv=None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    configure_logging(settings.log_level, settings.log_file)

    if args.command == 'generate':
        return cmd_generate(args, settings)
    if args.command == 'inspect':
        return await cmd_inspect(args, settings)
    return await cmd_deploy(args, settings)


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
