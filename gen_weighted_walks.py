import networkx as nx
import random
from alias_sampler import AliasSampler


def build_graph(edge_list, directed=False):
    """
    Args:
        edge_list (list of tuple): (u, v) or (u, v, weight) edges.
        directed (bool): Build a DiGraph instead of a Graph.
    """
    G = nx.DiGraph() if directed else nx.Graph()
    for edge in edge_list:
        if len(edge) == 3:
            G.add_edge(edge[0], edge[1], weight=edge[2])
        else:
            G.add_edge(edge[0], edge[1])
    return G


def preprocess_transition_tables(G, weight="weight", rng=None):
    """
    Maps each node to (sorted neighbours, alias sampler over them), weighted
    by the edge attribute `weight` (1 when missing). Nodes without
    neighbours, or whose edges all weigh 0, get no entry.
    """
    rng = rng if rng is not None else random.Random()
    tables = {}
    for node in G.nodes():
        neighbors = sorted(G.neighbors(node))
        weights = [G[node][nbr].get(weight, 1) for nbr in neighbors]
        if not neighbors or all(w == 0 for w in weights):
            continue
        tables[node] = (neighbors, AliasSampler(weights, rng=rng))
    return tables


def route(source, tables):
    """Picks the next hop from `source`, or None when it has nowhere to go."""
    if source not in tables:
        return None
    neighbors, sampler = tables[source]
    return neighbors[sampler.sample()]


def weighted_walk(walk_length, start_node, tables):
    if walk_length < 1:
        raise ValueError(f"walk_length must be positive. Got {walk_length}.")
    walk = [start_node]

    while len(walk) < walk_length:
        nxt = route(walk[-1], tables)
        if nxt is None:
            break
        walk.append(nxt)
    return walk


def simulate_walks(G, num_walks, walk_length, weight="weight", seed=None):
    rng = random.Random(seed)
    tables = preprocess_transition_tables(G, weight=weight, rng=rng)
    nodes = list(G.nodes())
    walks = []

    for _ in range(num_walks):
        rng.shuffle(nodes)
        for node in nodes:
            walk = weighted_walk(walk_length, node, tables)
            walks.append(walk)

    return walks
