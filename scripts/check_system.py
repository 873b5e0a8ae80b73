"""
System Check Script
Verifies configuration, RPC connectivity, signer balance and the
recorded MockCore deployment
"""

import asyncio
import os
import sys
from web3 import Web3
from loguru import logger

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bindings import CallExecutionError, ReadOnlyProvider, Signer
from contracts import mock_core
from utils.config import load_settings
from utils.rpc_manager import RPCManager


def check_configuration(settings):
    """Check required settings"""
    logger.info("Checking configuration...")

    if not settings.rpc_urls:
        logger.error("  No RPC URL configured (RPC_URL)")
        return False
    logger.success(f"  ✓ {len(settings.rpc_urls)} RPC endpoint(s) configured")

    if not settings.private_key:
        logger.warning("  PRIVATE_KEY not set - read-only mode")
    else:
        logger.success("  ✓ Signer key configured")

    return True


def check_rpc_connection(settings):
    """Check that at least one endpoint answers"""
    logger.info("Checking RPC connections...")

    try:
        w3 = RPCManager.from_settings(settings).get_web3()
    except ConnectionError as e:
        logger.error(f"  ✗ {e}")
        return None

    logger.success(f"  ✓ Connected (chain {w3.eth.chain_id}, block {w3.eth.block_number})")
    return w3


def check_signer_balance(settings, w3: Web3):
    """Check the signer can pay for a deployment"""
    logger.info("Checking signer balance...")

    if not settings.private_key:
        logger.warning("  No signer - skipping balance check")
        return True

    signer = Signer.from_settings(w3, settings)
    balance = w3.from_wei(w3.eth.get_balance(signer.address), 'ether')
    logger.info(f"  {signer.address}: {balance:.4f} ETH")

    if balance == 0:
        logger.warning("  ⚠ Signer has no funds")
        return False

    logger.success("  ✓ Signer funded")
    return True


async def check_contract_deployment(w3: Web3):
    """Check the recorded MockCore deployment answers view calls"""
    logger.info("Checking MockCore deployment...")

    contract_address = os.getenv('MOCK_CORE_ADDRESS')
    if not contract_address:
        logger.warning("  MockCore not deployed yet")
        logger.info("  Run: python scripts/deploy_contract.py")
        return False

    handle = mock_core.connect(contract_address, ReadOnlyProvider(w3))
    try:
        local_domain = await handle.call('localDomain')
        count = await handle.call('count')
    except CallExecutionError as e:
        logger.error(f"  ✗ No working MockCore at {contract_address}: {e}")
        return False

    logger.success(f"  ✓ MockCore at {contract_address} (domain {local_domain}, {count} messages)")
    return True


async def run_checks():
    """Run all system checks"""
    logger.info("=" * 70)
    logger.info("Contract Bindings System Check")
    logger.info("=" * 70)

    settings = load_settings()
    results = [("Configuration", check_configuration(settings))]

    w3 = check_rpc_connection(settings)
    results.append(("RPC Connection", w3 is not None))

    if w3 is not None:
        results.append(("Signer Balance", check_signer_balance(settings, w3)))
        results.append(("MockCore Deployment", await check_contract_deployment(w3)))

    logger.info("")
    passed = sum(1 for _, result in results if result)
    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info(f"Total: {passed}/{len(results)} checks passed")
    return 0 if passed == len(results) else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(run_checks()))
