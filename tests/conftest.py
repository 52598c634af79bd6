import pytest

from core.especificacao import build_machine

SAMPLE_STATES = "q0,q1,q2,q3"
SAMPLE_INPUT_ALPHABET = "a,b"
SAMPLE_OUTPUT_ALPHABET = "0,1"
SAMPLE_DIAGRAM = "q0\tq1/0\tq0/1\nq1\tq2/0\tq0/0\nq2\tq2/0\tq3/1\nq3\tq1/0\tq0/0"


@pytest.fixture
def sample_machine():
    return build_machine(SAMPLE_STATES, SAMPLE_INPUT_ALPHABET, SAMPLE_OUTPUT_ALPHABET, SAMPLE_DIAGRAM)
