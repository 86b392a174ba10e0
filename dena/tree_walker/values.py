"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but callables need more help.
"""
from abc import abstractmethod
from typing import Callable, Union
from .. import syntax
from ..environment import Environment
from .types import ARGS, VALUE, DenaValue
from .evaluator import Interpreter

class Function(DenaValue):
	"""
	A run-time object that can be applied with arguments.

	Two functions are equal when they share a name and an arity.
	That is a weak notion of equality, but it is the language's notion.
	"""
	name: str
	arity: int

	@abstractmethod
	def apply(self, args: ARGS) -> VALUE: pass

	def __eq__(self, other):
		if isinstance(other, Function):
			return self.name == other.name and self.arity == other.arity
		return NotImplemented

	def __hash__(self): return hash((self.name, self.arity))

SUBROUTINE = Union[syntax.FunctionDecl, syntax.AnonFunction]

class Closure(Function):
	""" The run-time manifestation of a sub-function: a callable value tied to its natal environment. """
	def __init__(self, interpreter:Interpreter, sub:SUBROUTINE, captures:Environment):
		self._interpreter = interpreter
		self._sub = sub
		self._captures = captures
		self.name = sub.name
		self.arity = len(sub.params)

	def __str__(self): return "<fn %s>" % self.name

	def apply(self, args: ARGS) -> VALUE:
		assert len(args) == self.arity, (self, args)
		inner = Environment(self._captures)
		for param, arg in zip(self._sub.params, args):
			inner.define(param.lexeme, arg)
		signal = self._interpreter.run_block(self._sub.body, inner)
		return None if signal is None else signal.value

class Primitive(Function):
	""" A function implemented in Python, such as the natives in the global frame. """
	def __init__(self, name:str, arity:int, fn:Callable):
		self.name = name
		self.arity = arity
		self._fn = fn

	def __str__(self): return "<native fn %s>" % self.name

	def apply(self, args: ARGS) -> VALUE:
		return self._fn(*args)
