"""
Contract Interface
Immutable view over a contract ABI: signatures, selectors, topics and
call/event encoding that works without any deployed instance
"""

import copy
from typing import Any, Dict, List, Optional, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from hexbytes import HexBytes
from web3 import Web3
from loguru import logger

from .errors import CallExecutionError, InterfaceError


ENTRY_TYPES = ('function', 'event', 'constructor', 'error', 'fallback', 'receive')
STATE_MUTABILITIES = ('pure', 'view', 'nonpayable', 'payable')


def canonical_type(param: Dict) -> str:
    """
    Canonical ABI type string of a parameter

    Tuples are expanded to ``(t1,t2,...)`` keeping any array suffix.
    """
    type_str = param['type']
    if type_str.startswith('tuple'):
        inner = ','.join(canonical_type(c) for c in param.get('components', []))
        return f"({inner}){type_str[len('tuple'):]}"
    return type_str


def entry_signature(entry: Dict) -> str:
    """``name(type1,type2)`` signature of a function, event or error entry"""
    types = ','.join(canonical_type(p) for p in entry.get('inputs', []))
    return f"{entry['name']}({types})"


def _to_bytes(value) -> bytes:
    if isinstance(value, str):
        return bytes(HexBytes(value))
    return bytes(value)


class ContractInterface:
    """
    Interface descriptor for one contract

    The ABI passed in is deep-copied and never handed out by reference, so an
    interface cannot be mutated after construction. Function selectors must
    be unique.
    """

    def __init__(self, abi: Sequence[Dict], name: str = 'Contract'):
        """
        Initialize Contract Interface

        Args:
            abi: ABI entries as produced by the compiler
            name: Contract name (used in logs and errors)

        Raises:
            InterfaceError: Malformed entry or duplicate function selector
        """
        if not isinstance(abi, (list, tuple)):
            raise InterfaceError(f"{name}: ABI must be a list of entries")

        self.name = name
        self._abi = copy.deepcopy(list(abi))

        self._functions: Dict[str, Dict] = {}
        self._events: Dict[str, Dict] = {}
        self._errors: Dict[str, Dict] = {}
        self._selectors: Dict[str, str] = {}
        self._topics: Dict[str, str] = {}
        self._constructor: Optional[Dict] = None

        for entry in self._abi:
            self._index_entry(entry)

        logger.debug(
            f"{name} interface: {len(self._functions)} functions, "
            f"{len(self._events)} events"
        )

    def _index_entry(self, entry: Dict):
        """Validate one ABI entry and add it to the lookup tables"""
        if not isinstance(entry, dict):
            raise InterfaceError(f"{self.name}: ABI entry is not an object: {entry!r}")

        # Entries without a type default to functions (legacy solc output)
        entry_type = entry.get('type', 'function')
        if entry_type not in ENTRY_TYPES:
            raise InterfaceError(f"{self.name}: unknown ABI entry type '{entry_type}'")

        mutability = entry.get('stateMutability')
        if mutability is not None and mutability not in STATE_MUTABILITIES:
            raise InterfaceError(
                f"{self.name}: unknown stateMutability '{mutability}' on {entry.get('name')}"
            )

        if entry_type == 'constructor':
            self._constructor = entry
            return
        if entry_type in ('fallback', 'receive'):
            return

        if not entry.get('name'):
            raise InterfaceError(f"{self.name}: {entry_type} entry without a name")

        signature = entry_signature(entry)

        if entry_type == 'function':
            selector = '0x' + Web3.keccak(text=signature)[:4].hex().removeprefix('0x')
            if selector in self._selectors:
                raise InterfaceError(
                    f"{self.name}: selector {selector} of {signature} collides "
                    f"with {self._selectors[selector]}"
                )
            self._selectors[selector] = signature
            self._functions[signature] = entry
        elif entry_type == 'event':
            if signature in self._events:
                raise InterfaceError(f"{self.name}: duplicate event {signature}")
            self._events[signature] = entry
            # Anonymous events emit no signature topic
            if not entry.get('anonymous', False):
                topic = '0x' + Web3.keccak(text=signature).hex().removeprefix('0x')
                self._topics[topic] = signature
        else:
            self._errors[signature] = entry

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def abi(self) -> List[Dict]:
        """Copy of the ABI entries, in declaration order"""
        return copy.deepcopy(self._abi)

    @property
    def constructor(self) -> Optional[Dict]:
        return copy.deepcopy(self._constructor)

    @property
    def function_names(self) -> List[str]:
        return [entry['name'] for entry in self._functions.values()]

    @property
    def event_names(self) -> List[str]:
        return [entry['name'] for entry in self._events.values()]

    @property
    def selectors(self) -> Dict[str, str]:
        """Mapping of 4-byte selector (0x hex) -> function signature"""
        return dict(self._selectors)

    def _lookup(self, table: Dict[str, Dict], kind: str, key: str) -> Dict:
        if key in table:
            return table[key]

        matches = [entry for entry in table.values() if entry['name'] == key]
        if not matches:
            raise InterfaceError(f"{self.name}: no {kind} named '{key}'")
        if len(matches) > 1:
            candidates = ', '.join(entry_signature(m) for m in matches)
            raise InterfaceError(
                f"{self.name}: {kind} '{key}' is overloaded, use a full signature ({candidates})"
            )
        return matches[0]

    def get_function(self, name_or_signature: str) -> Dict:
        """
        Look up a function entry

        Args:
            name_or_signature: ``count`` or ``count()``

        Returns:
            Copy of the ABI entry

        Raises:
            InterfaceError: Unknown or ambiguous function
        """
        return copy.deepcopy(self._lookup(self._functions, 'function', name_or_signature))

    def get_event(self, name_or_signature: str) -> Dict:
        """Look up an event entry (copy)"""
        return copy.deepcopy(self._lookup(self._events, 'event', name_or_signature))

    def has_function(self, name_or_signature: str) -> bool:
        try:
            self._lookup(self._functions, 'function', name_or_signature)
            return True
        except InterfaceError:
            return False

    def function_signature(self, name_or_signature: str) -> str:
        return entry_signature(self._lookup(self._functions, 'function', name_or_signature))

    def selector(self, name_or_signature: str) -> str:
        """4-byte function selector as 0x-prefixed hex"""
        signature = self.function_signature(name_or_signature)
        return next(sel for sel, sig in self._selectors.items() if sig == signature)

    def event_topic(self, name_or_signature: str) -> str:
        """Topic 0 of an event as 0x-prefixed hex"""
        signature = entry_signature(self._lookup(self._events, 'event', name_or_signature))
        for topic, sig in self._topics.items():
            if sig == signature:
                return topic
        raise InterfaceError(f"{self.name}: event {signature} is anonymous and has no topic")

    def is_state_changing(self, name_or_signature: str) -> bool:
        """True for nonpayable / payable functions"""
        entry = self._lookup(self._functions, 'function', name_or_signature)
        mutability = entry.get('stateMutability')
        if mutability is None:
            # pre-0.4.16 ABI
            return not entry.get('constant', False)
        return mutability in ('nonpayable', 'payable')

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode_function_data(self, name_or_signature: str, args: Sequence[Any] = ()) -> str:
        """
        ABI-encode a function call

        Returns:
            0x-prefixed calldata (selector + encoded arguments)
        """
        entry = self._lookup(self._functions, 'function', name_or_signature)
        input_types = [canonical_type(p) for p in entry.get('inputs', [])]

        if len(args) != len(input_types):
            raise InterfaceError(
                f"{self.name}.{entry['name']} expects {len(input_types)} arguments, got {len(args)}"
            )

        selector = self.selector(entry_signature(entry))
        encoded = encode(input_types, list(args)) if input_types else b''
        return selector + encoded.hex()

    def decode_function_result(self, name_or_signature: str, data) -> Any:
        """
        ABI-decode return data of a function

        Returns:
            None for no outputs, the value for one output, a tuple otherwise

        Raises:
            CallExecutionError: Return data is empty or does not decode
        """
        entry = self._lookup(self._functions, 'function', name_or_signature)
        output_types = [canonical_type(p) for p in entry.get('outputs', [])]
        if not output_types:
            return None

        raw = _to_bytes(data)
        if not raw:
            raise CallExecutionError(
                f"{self.name}.{entry['name']} returned no data (is there a contract at the address?)"
            )

        try:
            decoded = decode(output_types, raw)
        except DecodingError as e:
            raise CallExecutionError(f"{self.name}.{entry['name']}: cannot decode return data: {e}") from e

        if len(decoded) == 1:
            return decoded[0]
        return decoded

    def encode_deploy(self, bytecode: str, args: Sequence[Any] = ()) -> str:
        """
        Deployment payload: bytecode followed by encoded constructor arguments

        The bytecode itself is passed through unchanged.
        """
        if self._constructor is None:
            if args:
                raise InterfaceError(
                    f"{self.name} has no constructor but {len(args)} constructor arguments were given"
                )
            return bytecode

        input_types = [canonical_type(p) for p in self._constructor.get('inputs', [])]
        if len(args) != len(input_types):
            raise InterfaceError(
                f"{self.name} constructor expects {len(input_types)} arguments, got {len(args)}"
            )
        if not input_types:
            return bytecode

        return bytecode + encode(input_types, list(args)).hex()

    def decode_event_log(self, log: Dict) -> Optional[Dict]:
        """
        Decode a raw log entry emitted by this contract

        Args:
            log: Log dict with ``topics`` and ``data``

        Returns:
            Dict with ``event``, ``args``, ``address``, ``logIndex``,
            ``transactionHash``, or None when topic 0 is not one of our events
        """
        topics = [HexBytes(t) for t in log.get('topics', [])]
        if not topics:
            return None

        topic0 = '0x' + topics[0].hex().removeprefix('0x')
        signature = self._topics.get(topic0)
        if signature is None:
            return None

        entry = self._events[signature]
        inputs = entry.get('inputs', [])
        indexed = [p for p in inputs if p.get('indexed')]
        plain = [p for p in inputs if not p.get('indexed')]

        if len(indexed) != len(topics) - 1:
            raise InterfaceError(
                f"{self.name}.{entry['name']}: expected {len(indexed)} indexed topics, got {len(topics) - 1}"
            )

        values = {}
        for param, topic in zip(indexed, topics[1:]):
            param_type = canonical_type(param)
            # Dynamic indexed values are stored as their keccak hash
            if param_type in ('string', 'bytes') or param_type.endswith(']') or param_type.startswith('('):
                values[param['name']] = bytes(topic)
            else:
                values[param['name']] = decode([param_type], bytes(topic))[0]

        if plain:
            decoded = decode([canonical_type(p) for p in plain], _to_bytes(log.get('data', b'')))
            for param, value in zip(plain, decoded):
                values[param['name']] = value

        return {
            'event': entry['name'],
            'args': values,
            'address': log.get('address'),
            'logIndex': log.get('logIndex'),
            'transactionHash': log.get('transactionHash'),
        }

    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, ContractInterface):
            return NotImplemented
        return self._abi == other._abi

    def __hash__(self):
        return hash(tuple(self._selectors))

    def __repr__(self):
        return f"ContractInterface(name={self.name!r}, functions={len(self._functions)}, events={len(self._events)})"
