"""
Binding Generator
Renders a Python binding module (ABI, bytecode, factory helpers) for one
contract
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from loguru import logger

from bindings import ContractInterface

from .artifacts import Artifact, load_artifact


INDENT = '    '

MODULE_TEMPLATE = '''"""
{name} Contract Binding
Autogenerated from the compiled contract artifact. Do not edit manually.
"""

from bindings import ContractFactory, ContractHandle, ContractInterface, contract_at


CONTRACT_NAME = {name!r}

ABI = {abi}

BYTECODE = {bytecode}


def factory(signer=None) -> ContractFactory:
    """{name} factory; pass a Signer to deploy"""
    return ContractFactory(ABI, BYTECODE, signer, name=CONTRACT_NAME)


def create_interface() -> ContractInterface:
    return ContractInterface(ABI, name=CONTRACT_NAME)


def connect(address: str, signer_or_provider) -> ContractHandle:
    """
    Handle for a deployed {name}

    Handles built from a read-only provider cannot send transactions.
    """
    return contract_at(address, ABI, signer_or_provider, name=CONTRACT_NAME)
'''


def module_name(contract_name: str) -> str:
    """MockCore -> mock_core, MockERC4626 -> mock_erc4626"""
    snake = re.sub(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])', '_', contract_name)
    snake = re.sub(r'\W', '_', snake).lower()
    if snake[:1].isdigit():
        snake = '_' + snake
    return snake


def render_literal(value: Any, depth: int = 0) -> str:
    """Python literal for JSON-like data, one item per line"""
    pad = INDENT * depth
    inner = INDENT * (depth + 1)

    if isinstance(value, dict):
        if not value:
            return '{}'
        items = [f"{inner}{key!r}: {render_literal(item, depth + 1)}," for key, item in value.items()]
        return '{\n' + '\n'.join(items) + f'\n{pad}}}'

    if isinstance(value, (list, tuple)):
        if not value:
            return '[]'
        items = [f"{inner}{render_literal(item, depth + 1)}," for item in value]
        return '[\n' + '\n'.join(items) + f'\n{pad}]'

    return repr(value)


def render_binding(name: str, abi: List[Dict], bytecode: Optional[str]) -> str:
    """
    Render the source of a binding module

    Args:
        name: Contract name
        abi: ABI entries (validated before rendering)
        bytecode: 0x-prefixed creation bytecode, or None for attach-only bindings

    Returns:
        Module source code
    """
    # Raises InterfaceError on duplicate selectors or malformed entries
    ContractInterface(abi, name=name)

    if not name.isidentifier():
        logger.warning(f"Contract name {name!r} is not a Python identifier")

    return MODULE_TEMPLATE.format(
        name=name,
        abi=render_literal(abi),
        bytecode=repr(bytecode),
    )


def write_binding(
    artifact: Union[Artifact, str, Path],
    out_dir: Union[str, Path],
    name: Optional[str] = None
) -> Path:
    """
    Generate a binding module from an artifact and write it

    Args:
        artifact: Loaded Artifact or path to one
        out_dir: Output package directory
        name: Override contract name

    Returns:
        Path of the written module
    """
    if not isinstance(artifact, Artifact):
        artifact = load_artifact(artifact, name=name)

    contract_name = name or artifact.name
    source = render_binding(contract_name, artifact.abi, artifact.bytecode)

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    init_file = out_dir / '__init__.py'
    if not init_file.exists():
        init_file.write_text('', encoding='utf-8')

    out_path = out_dir / f"{module_name(contract_name)}.py"
    out_path.write_text(source, encoding='utf-8')

    logger.success(f"Generated {contract_name} binding: {out_path}")
    return out_path
