# pageload_profiler/analyzer/request_chains.py - Critical request chain analysis
"""
Critical request chain analysis.
Walks the request dependency tree and measures each chain that blocked rendering.
"""

from typing import Callable, Dict
from dataclasses import dataclass, field
import logging


@dataclass(frozen=True)
class NetworkRequest:
    """
    Timing facts of a single network request (times in seconds).
    """
    start_time: float
    end_time: float
    transfer_size: int = 0
    url: str = ""

    @property
    def duration_ms(self) -> float:
        """Request duration in milliseconds"""
        return (self.end_time - self.start_time) * 1000


@dataclass
class RequestNode:
    """
    One request in the dependency tree together with the requests it initiated.
    """
    request: NetworkRequest
    children: Dict[str, 'RequestNode'] = field(default_factory=dict)

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass(frozen=True)
class ChainObservation:
    """
    Emitted once per node while walking the tree.
    """
    depth: int
    node_id: str
    node: RequestNode
    chain_duration_ms: float
    chain_transfer_size: int


@dataclass(frozen=True)
class LongestChain:
    """Stats about the longest chain, as determined by duration."""
    duration_ms: float = 0.0
    length: int = 0
    transfer_size: int = 0

    def to_dict(self) -> Dict:
        return {
            'duration_ms': self.duration_ms,
            'length': self.length,
            'transfer_size': self.transfer_size,
        }


RequestTree = Dict[str, RequestNode]


def traverse(tree: RequestTree, visit: Callable[[ChainObservation], None]):
    """
    Walk the tree depth-first in pre-order, calling visit for every node.

    The start time of the first node visited becomes the origin of every
    chain duration in the walk, including those of later sibling branches.

    Args:
        tree: Mapping of request id to node
        visit: Callback receiving a ChainObservation per node
    """
    def walk(nodes: RequestTree, depth: int, origin: float, has_origin: bool,
             transfer_size: int = 0):
        for node_id, node in nodes.items():
            request = node.request
            if not has_origin:
                origin = request.start_time
                has_origin = True

            visit(ChainObservation(
                depth=depth,
                node_id=node_id,
                node=node,
                chain_duration_ms=(request.end_time - origin) * 1000,
                chain_transfer_size=transfer_size + request.transfer_size,
            ))

            if node.children:
                # The running transfer size is not handed down: each level
                # restarts from zero.
                walk(node.children, depth + 1, origin, has_origin)

    walk(tree, 0, 0.0, False)


def get_longest_chain(tree: RequestTree) -> LongestChain:
    """
    Find the chain with the greatest duration.

    Args:
        tree: Mapping of request id to node

    Returns:
        LongestChain with a 1-indexed length, zeroed for an empty tree
    """
    longest = {'duration_ms': 0.0, 'depth': 0, 'transfer_size': 0, 'seen': False}

    def visit(observation: ChainObservation):
        longest['seen'] = True
        if observation.chain_duration_ms > longest['duration_ms']:
            longest['duration_ms'] = observation.chain_duration_ms
            longest['depth'] = observation.depth
            longest['transfer_size'] = observation.chain_transfer_size

    traverse(tree, visit)

    if not longest['seen']:
        return LongestChain()

    return LongestChain(
        duration_ms=longest['duration_ms'],
        length=longest['depth'] + 1,
        transfer_size=longest['transfer_size'],
    )


def count_terminal_chains(tree: RequestTree) -> int:
    """
    Count the chains that end below the initial navigation request.

    Args:
        tree: Full tree, keyed at the root by the navigation entry

    Returns:
        Number of leaf requests reachable from the navigation entry
    """
    navigation_id = next(iter(tree), None)
    if navigation_id is None:
        return 0

    count = 0
    stack = list(tree[navigation_id].children.values())
    while stack:
        node = stack.pop()
        if node.is_leaf:
            count += 1
        else:
            stack.extend(node.children.values())

    return count


class CriticalRequestChainAnalyzer:
    """
    Summarizes the critical request chains of a page load.
    """

    def __init__(self):
        """
        Initialize the chain analyzer.
        """
        self.logger = logging.getLogger(__name__)

    def analyze(self, tree: RequestTree) -> Dict:
        """
        Analyze a request dependency tree.

        Args:
            tree: Full tree keyed by the navigation entry

        Returns:
            Dictionary with chain count, longest chain and request count
        """
        request_count = 0

        def visit(observation: ChainObservation):
            nonlocal request_count
            request_count += 1

        traverse(tree, visit)

        chain_count = count_terminal_chains(tree)
        longest_chain = get_longest_chain(tree)

        self.logger.debug(
            f"Found {chain_count} chains across {request_count} requests "
            f"(longest: {longest_chain.length} hops, {longest_chain.duration_ms:.0f}ms)"
        )

        return {
            'chain_count': chain_count,
            'request_count': request_count,
            'longest_chain': longest_chain.to_dict(),
        }
