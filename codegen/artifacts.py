"""
Artifact Loader
Reads ABI and bytecode from Hardhat / Foundry build output or bare ABI files
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union
from loguru import logger


@dataclass(frozen=True)
class Artifact:
    """Compiled contract: name, ABI entries and creation bytecode"""

    name: str
    abi: List[Dict]
    bytecode: Optional[str]
    source: Optional[Path] = None


def _extract_bytecode(raw) -> Optional[str]:
    # Foundry: {"object": "0x..."}; Hardhat: "0x..."
    if isinstance(raw, dict):
        raw = raw.get('object')

    if not raw:
        return None
    if not isinstance(raw, str):
        raise ValueError(f"Unexpected bytecode format: {type(raw).__name__}")

    if not raw.startswith('0x'):
        raw = '0x' + raw

    # Interfaces and abstract contracts compile to empty bytecode
    if raw == '0x':
        return None
    return raw


def load_artifact(path: Union[str, Path], name: Optional[str] = None) -> Artifact:
    """
    Load a compiled contract artifact

    Args:
        path: Artifact JSON (Hardhat, Foundry) or a bare ABI list
        name: Contract name (default: contractName field or file stem)

    Returns:
        Artifact

    Raises:
        FileNotFoundError: Path does not exist
        ValueError: JSON is not a recognised artifact
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Contract artifact not found: {path}")

    with path.open('r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, list):
        abi, bytecode = data, None
        contract_name = name or path.stem
    elif isinstance(data, dict) and 'abi' in data:
        abi = data['abi']
        bytecode = _extract_bytecode(data.get('bytecode'))
        contract_name = name or data.get('contractName') or path.stem
    else:
        raise ValueError(f"{path} is neither a compiled artifact nor an ABI list")

    if not isinstance(abi, list):
        raise ValueError(f"{path}: 'abi' must be a list")

    logger.debug(f"Loaded artifact {contract_name} from {path} (bytecode: {bytecode is not None})")
    return Artifact(name=contract_name, abi=abi, bytecode=bytecode, source=path)


def find_artifacts(directory: Union[str, Path]) -> List[Path]:
    """
    List contract artifacts under a build directory

    Skips Hardhat debug files (``*.dbg.json``) and build-info.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Artifact directory not found: {directory}")

    artifacts = []
    for path in sorted(directory.rglob('*.json')):
        if path.name.endswith('.dbg.json') or 'build-info' in path.parts:
            continue
        artifacts.append(path)

    return artifacts
