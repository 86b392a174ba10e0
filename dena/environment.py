"""
Simplest possible environment concept: the canonical list-structured search,
except that nobody searches. The resolver already worked out how many links
to follow, so a lookup either hops exactly that many parents or, lacking a
distance, goes straight to the global frame at the root of the chain.

Frames are shared by every closure and child frame that refers to them.
Python's reference counting reclaims a frame once the last holder lets go.
"""
from typing import Any, Optional

class Environment:
	parent: Optional["Environment"]

	def __init__(self, parent:Optional["Environment"]=None):
		self._bindings = {}
		self.parent = parent

	def __repr__(self):
		return "<Environment %s%s>" % (sorted(self._bindings), "" if self.parent is None else " ...")

	def __contains__(self, name:str): return name in self._bindings

	def define(self, name:str, value:Any):
		""" Always succeeds. A second definition in the same frame simply replaces the first. """
		self._bindings[name] = value

	def root(self) -> "Environment":
		frame = self
		while frame.parent is not None: frame = frame.parent
		return frame

	def ancestor(self, distance:int) -> "Environment":
		frame = self
		for _ in range(distance):
			# A resolver/interpreter disagreement, not a mistake in the user's program.
			if frame.parent is None:
				raise AssertionError("Distance %d runs off the end of the chain." % distance)
			frame = frame.parent
		return frame

	def _address(self, distance:Optional[int]) -> "Environment":
		return self.root() if distance is None else self.ancestor(distance)

	def get(self, name:str, distance:Optional[int]=None) -> Any:
		"""
		Raises KeyError if the addressed frame has no such name.
		(Dena's nil is Python's None, so None cannot mean "absent".)
		"""
		return self._address(distance)._bindings[name]

	def assign(self, name:str, value:Any, distance:Optional[int]=None) -> bool:
		"""
		Overwrite an existing binding in the addressed frame.
		Answers whether there was one; if not, nothing changes.
		"""
		bindings = self._address(distance)._bindings
		if name in bindings:
			bindings[name] = value
			return True
		return False
