"""Domain layer: graph, node sets, parameters, errors."""
