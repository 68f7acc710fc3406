"""Lexically scoped runtime environments.

Each Environment owns its own name -> value mapping and the set of names declared constant in it. The parent link is
set once at creation and is only used for lookup, so the frames always form a tree: the global frame lives for the
whole run, function calls and counted-loop iterations get a child frame for their dynamic extent, and closures keep
their defining frame alive.
"""

from thenga.lang.error import EvalError


class Environment:
    """One scope frame with an optional parent frame."""

    def __init__(self, parent=None):
        self.parent = parent
        self.values = {}
        self.constants = set()

    def define(self, name, value, constant=False):
        """Declares name in this frame. A name may be declared at most once per frame."""
        if name in self.values:
            raise EvalError(f"Variable '{name}' already declared")
        self.values[name] = value
        if constant:
            self.constants.add(name)

    def resolve(self, name):
        """Returns the nearest frame, walking outward, that declares name."""
        env = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        raise EvalError(f"Undefined variable: '{name}'")

    def get(self, name):
        return self.resolve(name).values[name]

    def set(self, name, value):
        env = self.resolve(name)
        if name in env.constants:
            raise EvalError(f"Cannot reassign constant: '{name}'")
        env.values[name] = value

    def delete(self, name, force=False):
        """Removes name from the frame that declares it. Only a forced delete removes constants."""
        env = self.resolve(name)
        if name in env.constants:
            if not force:
                raise EvalError(f"Cannot delete constant: '{name}'")
            env.constants.discard(name)
        del env.values[name]

    def __contains__(self, name):
        try:
            self.resolve(name)
        except EvalError:
            return False
        return True
