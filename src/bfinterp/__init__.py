from .api import RunOptions, RunResult, run_file, run_string
from .configuration import Configuration, OnEOFAction
from .errors import BFError, BFIOError, BFLoadError, BFRuntimeError, LoadErrorKind
from .handlers import CaptureHandlers, HandlerResult, Handlers, StreamHandlers
from .instruction import Instruction, InstructionValue, emit, walk
from .interpreter import Interpreter
from .program import Program
from .tape import Tape

__all__ = [
    'Interpreter',
    'Program',
    'Instruction',
    'InstructionValue',
    'Tape',
    'Configuration',
    'OnEOFAction',
    'Handlers',
    'HandlerResult',
    'StreamHandlers',
    'CaptureHandlers',
    'BFError',
    'BFLoadError',
    'BFIOError',
    'BFRuntimeError',
    'LoadErrorKind',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
    'emit',
    'walk',
]
