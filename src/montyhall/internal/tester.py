"""Exercise checker for the Monty Hall notebooks.

Learners implement the puzzle's building blocks (win rates, reveal candidates,
closed-form scoring) and check them against case lists from
``notebooks/internal``.
"""
import copy

import ipywidgets as widgets
import numpy as np
from IPython.display import HTML, Markdown, display

CaseType = tuple[object, object] | tuple[object, object, str]


def _format_case(case: CaseType) -> tuple[object, object, str]:
    """Normalise a case into (inp, expected, desc)."""
    if len(case) == 2:
        inp, exp = case
        return inp, exp, ""
    return case


def _matches(out, exp) -> bool:
    if isinstance(out, np.ndarray) or isinstance(exp, np.ndarray):
        out, exp = np.asarray(out), np.asarray(exp)
        if out.dtype == bool or exp.dtype == bool:
            return out.shape == exp.shape and bool(np.all(out == exp))
        return out.shape == exp.shape and bool(np.allclose(out, exp, rtol=1e-07, atol=0))
    if isinstance(out, (float, np.floating)) and isinstance(exp, (int, float, np.number)):
        return bool(np.isclose(out, exp, rtol=1e-07, atol=0))
    return out == exp


def run_tests(func: callable, cases: list[CaseType], *, stop_on_first: bool = False) -> list[tuple[bool, str]]:
    """ Runs a set of exercise cases (expected outputs) on a learner's function.

    Args:
        func (callable): the function to check
        cases (sequence of input, expected, description | None): a tuple input is unpacked as
            positional arguments, a dict as keyword arguments, anything else is passed as is
        stop_on_first (bool):  break at first failure if True.

    Returns:
        List of (passed: bool, message: str)
    """
    results = []
    for i, raw in enumerate(cases, 1):
        inp, exp, desc = _format_case(raw)
        label = f"Case {i} " + (f"({desc})" if desc else "") + " —"
        try:
            inp = copy.deepcopy(inp)
            if isinstance(inp, tuple):
                out = func(*inp)
            elif isinstance(inp, dict):
                out = func(**inp)
            else:
                out = func(inp)

            if not _matches(out, exp):
                raise AssertionError(f"got {out!r}, expected {exp!r}")
            results.append((True, f"✅ {label} passed"))
        except AssertionError as err:
            results.append((False, f"❌ {label} failed: {err}"))
            if stop_on_first:
                break
        except Exception as e:
            results.append((False, f"❌ {label} raised {type(e).__name__}: {e}"))
            if stop_on_first:
                break
    return results


def make_tester(func: callable, cases: list[CaseType], stop_on_first: bool = False, *, label: str = "Check my answer"):
    """ Return a widget (Button + Output box) that checks the exercise when clicked.

    Args:
        func (callable): the learner's function
        cases  : sequence of (input, expected, [description])
        stop_on_first (bool): break at first failure if True.
        label (str): of the button text

    Returns:
        widget VBox: check button above an output box
    """
    out = widgets.Output()
    button = widgets.Button(description=label,
                            button_style="success",
                            tooltip="Click to check your code",
                            icon="check")

    def _on_click(_):
        out.clear_output()
        with out:
            res = run_tests(func, cases, stop_on_first=stop_on_first)
            if all(ok for ok, _ in res):
                display(HTML(
                    "<p style='color:green; font-weight:bold; font-size:1.1em'>"
                    "🐐 All cases passed, the host would be impressed!</p>"))
            else:
                first_fail = next(msg for ok, msg in res if not ok)
                display(HTML(f"<p style='color:red; font-weight:bold'>{first_fail}</p>"))
            display(Markdown("\n".join(f"- {msg}" for _, msg in res)))

    button.on_click(_on_click)
    centered_button = widgets.HBox([button], layout=widgets.Layout(justify_content="center"))
    return widgets.VBox([centered_button, out])
