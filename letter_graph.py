"""
Letter Graph

Builds an undirected graph over letter observations using a pluggable
adjacency predicate, then reads one word per connected component.
"""

from typing import Callable, Dict, List, Sequence, Set

import cv2
import numpy as np

from letter_node import LetterObservation


LetterGraph = Dict[LetterObservation, Set[LetterObservation]]
AdjacencyPredicate = Callable[[LetterObservation, LetterObservation], bool]

# Two tiles are adjacent when their joint enclosing box is smaller than
# this many average tile areas
ADJACENCY_AREA_FACTOR = 3.0


def bounding_box_adjacency(u: LetterObservation, v: LetterObservation) -> bool:
    """
    Default adjacency: minimum-area box around both tiles vs. their average area.

    Touching tiles give an enclosing box close to the sum of their own areas,
    a gap (or a diagonal offset) inflates it past the threshold.
    """
    all_points = np.vstack([u.corners(), v.corners()]).astype(np.float32)
    (_, _), (box_w, box_h), _ = cv2.minAreaRect(all_points)

    average_tile_area = 0.5 * (u.area + v.area)
    threshold = ADJACENCY_AREA_FACTOR * average_tile_area
    return box_w * box_h < threshold


def always_adjacent(u: LetterObservation, v: LetterObservation) -> bool:
    return True


def same_center_adjacency(u: LetterObservation, v: LetterObservation) -> bool:
    return u.center == v.center


ADJACENCY_STRATEGIES = {
    'bounding-box': bounding_box_adjacency,
    'always': always_adjacent,
    'same-center': same_center_adjacency,
}


def build_letter_graph(nodes: Sequence[LetterObservation],
                       is_adjacent: AdjacencyPredicate = bounding_box_adjacency) -> LetterGraph:
    """
    Build the adjacency graph over `nodes`.

    Every node becomes a key. For every ordered pair (u, v), self pairs
    included, an adjacent pair is inserted in both directions. Symmetry is
    only as good as the predicate. Exceptions from the predicate propagate.
    """
    graph: LetterGraph = {node: set() for node in nodes}
    for u in nodes:
        for v in nodes:
            if is_adjacent(u, v):
                graph[u].add(v)
                graph[v].add(u)
    return graph


def find_connected_components(graph: LetterGraph) -> List[List[LetterObservation]]:
    """
    Depth-first connected components.

    Each component lists its nodes in visitation order. A neighbour that is
    not itself a key of the graph raises KeyError.
    """
    visited = set()
    components = []

    for start in graph:
        if start in visited:
            continue

        component = []
        stack = [start]
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            component.append(node)
            for neighbor in graph[node]:
                if neighbor not in visited:
                    stack.append(neighbor)

        components.append(component)

    return components


def extract_words(graph: LetterGraph) -> List[str]:
    """
    One word per connected component.

    Only the letters of each word are guaranteed, not their reading order.
    """
    return [''.join(node.letter for node in component)
            for component in find_connected_components(graph)]
