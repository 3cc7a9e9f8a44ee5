"""Runtime variable environments.

An `Environment` maps variable names to runtime values and optionally links
to an enclosing environment, forming a scope chain: the interpreter's
global scope is the outermost link and every executed block pushes a fresh
child. Lookups and assignments walk the chain outwards; definitions always
write to the innermost scope, so redeclaring a name in the same scope simply
overwrites it and declaring it in an inner scope shadows the outer binding.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from tokens import Token
from diagnostics import LoxRuntimeError


class Environment:
    def __init__(self, enclosing: Optional[Environment] = None):
        self.values: Dict[str, Any] = {}
        self.enclosing = enclosing

    def define(self, name: str, value: Any) -> None:
        """Bind `name` in the current scope, replacing any existing binding."""
        self.values[name] = value

    def get(self, name: Token) -> Any:
        """Look up a variable in the current and enclosing scopes."""
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        elif self.enclosing is not None:
            return self.enclosing.get(name)
        else:
            raise LoxRuntimeError(name, f"Undefined variable {name.lexeme}")

    def assign(self, name: Token, value: Any) -> None:
        """Overwrite an existing binding in the nearest scope that defines it."""
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
        elif self.enclosing is not None:
            self.enclosing.assign(name, value)
        else:
            raise LoxRuntimeError(name, f"Undefined variable {name.lexeme}")

    def __contains__(self, name: str) -> bool:
        if name in self.values:
            return True
        elif self.enclosing is not None:
            return name in self.enclosing
        return False

    def __repr__(self) -> str:
        return f"Environment({self.values}, enclosing={self.enclosing!r})"
