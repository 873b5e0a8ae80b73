"""
MockCore Deployment Script
Deploys the MockCore contract through the configured signer and records
its address in .env
"""

import asyncio
import os
import sys
from loguru import logger

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bindings import Signer
from contracts import mock_core
from utils.config import load_settings
from utils.rpc_manager import RPCManager


MIN_BALANCE_ETH = 0.01


async def deploy_contract(assume_yes: bool = False):
    """Deploy MockCore"""

    logger.info("Starting MockCore deployment...")

    settings = load_settings()

    if not settings.private_key:
        logger.error("PRIVATE_KEY must be set")
        return 1

    w3 = RPCManager.from_settings(settings).get_web3()
    signer = Signer.from_settings(w3, settings)
    logger.info(f"Deploying from: {signer.address}")

    balance = w3.from_wei(w3.eth.get_balance(signer.address), 'ether')
    logger.info(f"Account balance: {balance} ETH")

    if balance < MIN_BALANCE_ETH:
        logger.error(f"Insufficient balance for deployment (need at least {MIN_BALANCE_ETH} ETH)")
        return 1

    factory = mock_core.factory(signer)

    # Estimate before asking for confirmation
    tx = factory.get_deploy_transaction()
    gas_estimate = w3.eth.estimate_gas({**tx, 'from': signer.address})
    gas_price = w3.eth.gas_price

    logger.info(f"Gas estimate: {gas_estimate}")
    logger.info(f"Gas price: {w3.from_wei(gas_price, 'gwei')} gwei")
    logger.info(f"Estimated deployment cost: {w3.from_wei(gas_estimate * gas_price, 'ether')} ETH")

    if not assume_yes:
        confirm = input("\nProceed with deployment? (yes/no): ")
        if confirm.lower() != 'yes':
            logger.info("Deployment cancelled")
            return 0

    pending = await factory.deploy(options={'gasPrice': gas_price})
    logger.info(f"Transaction sent: {pending.tx_hash.hex()}")
    logger.info("Waiting for confirmation...")

    handle = await pending.deployed(timeout=settings.receipt_timeout)

    logger.success("Contract deployed successfully!")
    logger.success(f"Contract address: {handle.address}")
    logger.success(f"Gas used: {pending.receipt['gasUsed']}")

    update_env_file(handle.address)
    return 0


def update_env_file(contract_address: str, env_path: str = ".env"):
    """Set MOCK_CORE_ADDRESS in the .env file"""
    lines = []
    if os.path.exists(env_path):
        with open(env_path, 'r') as f:
            lines = f.readlines()

    found = False
    for i, line in enumerate(lines):
        if line.startswith('MOCK_CORE_ADDRESS='):
            lines[i] = f'MOCK_CORE_ADDRESS={contract_address}\n'
            found = True
            break

    if not found:
        lines.append(f'MOCK_CORE_ADDRESS={contract_address}\n')

    with open(env_path, 'w') as f:
        f.writelines(lines)

    logger.success("Updated .env file with contract address")


if __name__ == "__main__":
    sys.exit(asyncio.run(deploy_contract(assume_yes='--yes' in sys.argv)))
