"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. The error taxonomy wants to point at phrases, and
the phrases want nothing to do with the error taxonomy.
"""

class Phrase:
	def left(self) -> int:
		""" Return the offset of the first character of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the offset just past the last character of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> slice: return slice(self.left(), self.right())

class Nom(Phrase):
	""" Representing the occurrence of a name anywhere. """
	def __init__(self, text:str, where:slice):
		assert isinstance(text, str)
		assert isinstance(where, slice), type(where)
		self.text, self.where = text, where
	def __repr__(self): return "<Name %r>" % self.text
	def left(self): return self.where.start
	def right(self): return self.where.stop

class Token(Phrase):
	""" A keyword or bit of punctuation, when its position matters. """
	def __init__(self, where:slice): self.where = where
	def left(self): return self.where.start
	def right(self): return self.where.stop

class ValueExpression(Phrase): pass

class Statement(Phrase): pass
