"""
This is the simple task-queue version of a scheduler.
Everything runs on one thread: a task proceeds until it pauses or finishes,
and then the next task in line gets a turn. Nothing touches an environment
record except the one task currently proceeding, so records need no locks.
"""
from collections import deque
from typing import Callable, Optional
from .evaluator import STEPS

class Task:
	""" A computation which can pause (and later resume) between statements. """
	def __init__(self, steps:STEPS, label:str):
		self._steps = steps
		self.label = label

	def __repr__(self): return "<Task %s>" % self.label

	def proceed(self) -> bool:
		""" Run until the task pauses (True) or finishes (False). """
		try: next(self._steps)
		except StopIteration: return False
		return True

	def abandon(self):
		self._steps.close()

class TaskQueue:
	"""
	Round-robin over the tasks that still have work to do.
	If any task raises an exception, the others are abandoned
	and the exception propagates out of `run`.
	"""
	def __init__(self, trace:Optional[Callable]=None):
		self._tasks = deque()
		self._counter = 0
		self.trace = trace or (lambda *args: None)

	def __len__(self): return len(self._tasks)

	def reset(self, trace:Optional[Callable]=None):
		self.abandon()
		self._counter = 0
		self.trace = trace or (lambda *args: None)

	def spawn(self, steps:STEPS, name:str) -> Task:
		self._counter += 1
		task = Task(steps, "%s#%d" % (name, self._counter))
		self.insert_task(task)
		return task

	def insert_task(self, task:Task):
		self.trace("Scheduling", task.label)
		self._tasks.append(task)

	def run(self):
		try:
			while self._tasks:
				task = self._tasks.popleft()
				if task.proceed():
					self.trace("Paused", task.label)
					self._tasks.append(task)
				else:
					self.trace("Finished", task.label)
		except BaseException:
			self.abandon()
			raise

	def abandon(self):
		while self._tasks: self._tasks.popleft().abandon()

MAIN_QUEUE = TaskQueue()
