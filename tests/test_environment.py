import unittest

from belated.binding import ABSENT, Binding, Kind, State
from belated.environment import EnvironmentRecord, ScopeKind, null_env
from belated.errors import (
	DuplicateNameError, UnboundAccessError, ReassignmentError,
	UnresolvedReferenceError, ContractViolation, ScriptReferenceError, ScriptTypeError,
)

def _record(outer=null_env, kind=ScopeKind.BLOCK):
	return EnvironmentRecord(outer, kind)

class BindingTests(unittest.TestCase):

	def test_fresh_entries(self):
		mutable = Binding("m", Kind.MUTABLE)
		self.assertIs(State.SET, mutable.state)
		self.assertIs(ABSENT, mutable.value)
		immutable = Binding("c", Kind.IMMUTABLE)
		self.assertIs(State.UNSET, immutable.state)
		self.assertFalse(immutable.is_set())

	def test_mutable_entry_overwrites(self):
		b = Binding("m", Kind.MUTABLE)
		for value in (1, "two", 3):
			b.set(value)
			self.assertEqual(value, b.get(False))

	def test_initialize_twice_breaks_contract(self):
		b = Binding("c", Kind.IMMUTABLE, awaiting_initializer=True)
		b.initialize(1)
		with self.assertRaises(ContractViolation): b.initialize(2)
		self.assertEqual(1, b.get(False))

	def test_initialize_after_write_once_breaks_contract(self):
		b = Binding("c", Kind.IMMUTABLE)
		b.set(1)
		with self.assertRaises(ContractViolation): b.initialize(2)

	def test_write_before_own_initializer(self):
		b = Binding("c", Kind.IMMUTABLE, awaiting_initializer=True)
		with self.assertRaises(UnboundAccessError): b.set(5)
		self.assertFalse(b.is_set())
		b.initialize(6)
		with self.assertRaises(ReassignmentError): b.set(7)
		self.assertEqual(6, b.get(False))

	def test_typeof_before_own_initializer(self):
		b = Binding("c", Kind.IMMUTABLE, awaiting_initializer=True)
		with self.assertRaises(UnboundAccessError): b.get(True)
		b.initialize(6)
		self.assertEqual(6, b.get(True))

class RecordTests(unittest.TestCase):

	def test_duplicates_rejected_whatever_the_kind(self):
		for first, second in [("mutable", "mutable"), ("mutable", "immutable"), ("immutable", "mutable"), ("immutable", "immutable")]:
			with self.subTest(first=first, second=second):
				env = _record()
				getattr(env, "create_%s_binding"%first)("x")
				with self.assertRaises(DuplicateNameError) as cm:
					getattr(env, "create_%s_binding"%second)("x")
				self.assertEqual("SyntaxError", cm.exception.family)

	def test_has_binding(self):
		outer = _record()
		outer.create_mutable_binding("a")
		inner = _record(outer)
		self.assertTrue(outer.has_binding("a"))
		self.assertFalse(inner.has_binding("a"))
		self.assertIs(outer, inner.resolve("a"))

	def test_shadowing_finds_innermost(self):
		outer = _record()
		outer.create_mutable_binding("a")
		outer.initialize_binding("a", "outer")
		inner = _record(outer)
		inner.create_immutable_binding("a")
		self.assertIs(inner, inner.resolve("a"))
		with self.assertRaises(UnboundAccessError):
			inner.resolve("a").get_binding_value("a")
		self.assertEqual("outer", outer.get_binding_value("a"))

	def test_unresolved(self):
		env = _record(_record())
		with self.assertRaises(UnresolvedReferenceError) as cm: env.resolve("nowhere")
		self.assertIsInstance(cm.exception, ScriptReferenceError)

	def test_unset_entry_survives_inspection(self):
		env = _record()
		env.create_immutable_binding("v")
		for _ in range(3):
			self.assertIs(ABSENT, env.get_binding_value("v", for_typeof=True))
			with self.assertRaises(UnboundAccessError): env.get_binding_value("v")
		self.assertFalse(env.binding("v").is_set())

	def test_chain(self):
		a = _record(kind=ScopeKind.MODULE)
		b = _record(a, ScopeKind.FUNCTION)
		c = _record(b)
		self.assertEqual([c, b, a], list(c.chain()))

class ScenarioTests(unittest.TestCase):
	""" The four canonical lifecycles, straight against the record interface. """

	def test_a_typeof_then_read(self):
		env = _record()
		env.create_immutable_binding("v")
		self.assertIs(ABSENT, env.get_binding_value("v", for_typeof=True))
		with self.assertRaises(UnboundAccessError): env.get_binding_value("v")

	def test_b_write_once(self):
		env = _record()
		env.create_immutable_binding("v")
		env.set_mutable_binding("v", 1)
		self.assertEqual(1, env.get_binding_value("v"))
		with self.assertRaises(ReassignmentError) as cm:
			env.set_mutable_binding("v", 2)
		self.assertIsInstance(cm.exception, ScriptTypeError)
		self.assertEqual(1, env.get_binding_value("v"))

	def test_b_same_error_as_ordinary_constant(self):
		env = _record()
		env.create_immutable_binding("deferred")
		env.set_mutable_binding("deferred", 1)
		env.create_immutable_binding("ordinary", awaiting_initializer=True)
		env.initialize_binding("ordinary", 1)
		failures = []
		for name in ("deferred", "ordinary"):
			try: env.set_mutable_binding(name, 2)
			except ReassignmentError as ex: failures.append((type(ex), ex.family))
		self.assertEqual(2, len(failures))
		self.assertEqual(failures[0], failures[1])

	def test_b_typeof_sees_the_written_value(self):
		env = _record()
		env.create_immutable_binding("v")
		env.set_mutable_binding("v", 1)
		for _ in range(2):
			self.assertEqual(1, env.get_binding_value("v", for_typeof=True))

	def test_c_siblings_are_independent(self):
		env = _record()
		for name in ("a", "b"): env.create_immutable_binding(name)
		env.set_mutable_binding("a", "A")
		self.assertEqual("A", env.get_binding_value("a"))
		with self.assertRaises(UnboundAccessError): env.get_binding_value("b")
		env.set_mutable_binding("b", "B")
		self.assertEqual("B", env.get_binding_value("b"))

	def test_d_suspension_changes_nothing(self):
		env = _record()
		env.create_immutable_binding("v")
		def writer():
			yield
			env.set_mutable_binding("v", "late")
		steps = writer()
		next(steps)
		# Meanwhile, some other path looks:
		with self.assertRaises(UnboundAccessError): env.get_binding_value("v")
		with self.assertRaises(StopIteration): next(steps)
		self.assertEqual("late", env.get_binding_value("v"))

	def test_iterations_own_their_entries(self):
		outer = _record()
		iterations = []
		for i in range(3):
			env = _record(outer, ScopeKind.ITERATION)
			env.create_immutable_binding("slot")
			iterations.append(env)
		iterations[0].set_mutable_binding("slot", 0)
		iterations[2].set_mutable_binding("slot", 2)
		self.assertEqual(0, iterations[0].get_binding_value("slot"))
		self.assertEqual(2, iterations[2].get_binding_value("slot"))
		with self.assertRaises(UnboundAccessError): iterations[1].get_binding_value("slot")
		iterations[1].set_mutable_binding("slot", 1)
		self.assertEqual(1, iterations[1].get_binding_value("slot"))

if __name__ == '__main__':
	unittest.main()
