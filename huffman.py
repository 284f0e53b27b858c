import math
from typing import Dict, List, Optional, Tuple, Union

from errors import CorruptStreamError


class Leaf: # Leaf of the Huffman tree, carries one symbol
    is_leaf = True

    def __init__(self, symbol: str, weight: int):
        self.symbol = symbol # one code point of the input text
        self.weight = weight

    def __repr__(self):
        return f"Leaf({self.symbol!r}, {self.weight})"


class Internal: # Internal node, owns a zero-child and a one-child
    is_leaf = False

    def __init__(self, weight: int, zero, one=None):
        self.weight = weight # sum of the children's weights
        self.zero = zero
        self.one = one # None only when wrapping the sole leaf of a one-symbol alphabet

    def __repr__(self):
        return f"Internal({self.weight}, {self.zero!r}, {self.one!r})"


HuffmanNode = Union[Leaf, Internal]


class MinHeap: # Array-backed binary min-heap ordered by node weight
    def __init__(self):
        self.data: List[HuffmanNode] = []

    def __len__(self) -> int:
        return len(self.data)

    def push(self, node: HuffmanNode) -> None:
        self.data.append(node)
        self._sift_up(len(self.data) - 1)

    def peek(self) -> HuffmanNode:
        if not self.data:
            raise IndexError("peek from an empty heap")
        return self.data[0]

    def pop(self) -> HuffmanNode:
        if not self.data:
            raise IndexError("pop from an empty heap")
        last = self.data.pop()
        if not self.data:
            return last
        top = self.data[0]
        self.data[0] = last
        self._sift_down(0)
        return top

    def _sift_up(self, index: int) -> None:
        data = self.data
        while index > 0:
            parent = (index - 1) // 2
            if data[parent].weight <= data[index].weight:
                break
            data[parent], data[index] = data[index], data[parent]
            index = parent

    def _sift_down(self, index: int) -> None:
        data = self.data
        n = len(data)
        while True:
            smallest = index
            left = 2 * index + 1
            right = left + 1
            if left < n and data[left].weight < data[smallest].weight:
                smallest = left
            if right < n and data[right].weight < data[smallest].weight:
                smallest = right
            if smallest == index:
                return
            data[smallest], data[index] = data[index], data[smallest]
            index = smallest


def freq_table(text: str) -> Dict[str, int]:
    ft: Dict[str, int] = {}
    for ch in text:
        ft[ch] = ft.get(ch, 0) + 1
    return ft


def build_huffman_tree(frequency_table: Dict[str, int]) -> Optional[HuffmanNode]: # frequency_table: dict of symbol -> count
    heap = MinHeap()
    for symbol, weight in frequency_table.items():
        heap.push(Leaf(symbol, weight))

    if len(heap) == 0:
        return None

    # One distinct symbol: wrap it so it still gets the 1-bit code "0"
    if len(heap) == 1:
        only = heap.pop()
        return Internal(only.weight, only, None)

    while len(heap) > 1:
        zero = heap.pop()
        one = heap.pop()
        heap.push(Internal(zero.weight + one.weight, zero, one))

    return heap.pop()


def generate_huffman_codes(root: Optional[HuffmanNode]) -> Dict[str, str]: # symbol -> bit string
    codes: Dict[str, str] = {}

    def walk(node, prefix):
        if node is None:
            return
        if node.is_leaf:
            codes[node.symbol] = prefix or "0" # root itself is a leaf
            return
        walk(node.zero, prefix + "0")
        walk(node.one, prefix + "1")

    walk(root, "")
    return codes


def average_code_length(code_map: Dict[str, str], frequency_table: Dict[str, int]) -> float:
    total = sum(frequency_table.values())
    if total == 0:
        return 0.0
    return sum(len(code_map[s]) * f for s, f in frequency_table.items()) / total


def entropy(frequency_table: Dict[str, int]) -> float:
    """Shannon entropy of the symbol distribution, in bits per symbol."""
    total = sum(frequency_table.values())
    h = 0.0
    for f in frequency_table.values():
        p = f / total
        h -= p * math.log2(p)
    return h


def pack_bits(text: str, code_map: Dict[str, str]) -> Tuple[bytes, int]:
    """
    Concatenates the code of every symbol and packs the bits MSB-first.
    Returns (packed_bytes, bit_length); the unused low-order bits of the
    last byte are zero.
    """
    out = bytearray()
    acc = 0
    acc_bits = 0
    bit_length = 0

    for ch in text:
        code = code_map[ch]
        bit_length += len(code)
        for bit in code:
            acc = (acc << 1) | (1 if bit == "1" else 0)
            acc_bits += 1
            if acc_bits == 8:
                out.append(acc)
                acc = 0
                acc_bits = 0

    if acc_bits:
        out.append((acc << (8 - acc_bits)) & 0xFF)

    return bytes(out), bit_length


def unpack_and_decode(packed: bytes, root: HuffmanNode, bit_length: int) -> str:
    """
    Walks the tree for the first bit_length bits of packed, emitting a
    symbol at every leaf. Bits left over after the last leaf are dropped.
    """
    decoded: List[str] = []
    node = root
    bits_read = 0

    for byte in packed:
        for i in range(7, -1, -1):
            if bits_read >= bit_length:
                return "".join(decoded)
            node = node.one if (byte >> i) & 1 else node.zero
            if node is None:
                raise CorruptStreamError(f"bit {bits_read} leads outside the code tree")
            if node.is_leaf:
                decoded.append(node.symbol)
                node = root
            bits_read += 1

    return "".join(decoded)
