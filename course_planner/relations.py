# === relations.py ===
import copy


class MultiMap:
    """Course name -> ordered list of course names.

    Duplicate values are kept. A key whose list runs empty is dropped, so
    membership means the name has at least one edge.
    """

    def __init__(self):
        self.edges = {}  # name -> [names]

    def insert(self, key, value):
        self.edges.setdefault(key, []).append(value)

    def get(self, key):
        return self.edges.get(key, [])

    def remove_one(self, key, value):
        values = self.edges.get(key)
        if not values or value not in values:
            return None
        values.remove(value)
        if not values:
            del self.edges[key]
        return value

    def remove_all(self, value):
        """Drop every occurrence of value, as key and in any list."""
        self.edges.pop(value, None)
        for key in list(self.edges):
            values = [v for v in self.edges[key] if v != value]
            if values:
                self.edges[key] = values
            else:
                del self.edges[key]

    def keys(self):
        return self.edges.keys()

    def items(self):
        return self.edges.items()

    def names(self):
        found = set(self.edges)
        for values in self.edges.values():
            found.update(values)
        return found

    def copy(self):
        clone = MultiMap()
        clone.edges = copy.deepcopy(self.edges)
        return clone

    def __contains__(self, key):
        return key in self.edges

    def __len__(self):
        return len(self.edges)

    def __iter__(self):
        return iter(self.edges)

    def __repr__(self):
        return f"MultiMap({self.edges!r})"
