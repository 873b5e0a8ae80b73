"""
Contract Deployment Wrapper
Runs scripts/deploy_contract.py (pass --yes to skip the confirmation prompt)
"""

import subprocess
import sys
from loguru import logger

if __name__ == "__main__":
    logger.info("Deploying MockCore via scripts/deploy_contract.py")

    result = subprocess.run(
        [sys.executable, "scripts/deploy_contract.py", *sys.argv[1:]],
        cwd="."
    )

    if result.returncode != 0:
        logger.error(f"Deployment script exited with code {result.returncode}")
    sys.exit(result.returncode)
