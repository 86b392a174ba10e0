"""
Natives: functions the global frame knows about before any program runs.
To add one, decorate a Python function with `@native(name, arity)`.
"""
import time
from .environment import Environment
from .tree_walker.values import Primitive

NATIVES: dict[str, Primitive] = {}

def native(name:str, arity:int):
	def decorate(fn):
		NATIVES[name] = Primitive(name, arity, fn)
		return fn
	return decorate

@native("clock", 0)
def clock():
	""" Seconds since the epoch, as a Number. """
	return time.time()

def install_natives(frame:Environment):
	assert frame.parent is None, "Natives belong in the global frame."
	for name, primitive in NATIVES.items():
		frame.define(name, primitive)
