"""Core treep components: normalizer, graph builder and validator.

Each component is a pure function over caller-supplied values with its
configuration passed explicitly. Import from the submodules directly:

    from treep.core.normalize import normalize
    from treep.core.graph import from_json
    from treep.core.validate import validate
"""
