"""techreport – IT support report assistant.

Turns language-model output into validated, ranked recommendation records
and wires report data, prompts and the model call around that pipeline.
"""

__version__ = "0.1.0"
