from passgauge.backends import BackendChoice
from passgauge.strength import EvaluationResult, PasswordStrength
from passgauge.view import render_view

def test_hidden_password_is_masked():
    view = render_view("hunter2", False, EvaluationResult(PasswordStrength.VERY_GUESSABLE, 7), BackendChoice.NATIVE)
    assert view.masked
    assert view.visibility_icon == "visibility_off"
    assert view.visibility_action == "Show"
    assert view.visibility_enabled
    assert view.timing_label == "Calculation time: 7 ms"
    assert view.progress_percent == 25
    assert view.selected_index == 0

def test_revealed_password_and_selection():
    view = render_view("hunter2", True, EvaluationResult(PasswordStrength.VERY_UNGUESSABLE, 120), BackendChoice.JS_ENGINE)
    assert not view.masked
    assert view.visibility_icon == "visibility"
    assert view.visibility_action == "Hide"
    assert view.progress_percent == 100
    assert view.strength_label == "Very unguessable"
    assert view.backend_labels == ("Native", "WebView", "JSEngine")
    assert view.selected_index == 2

def test_empty_password_disables_toggle():
    result = EvaluationResult(PasswordStrength.TOO_GUESSABLE, 0)
    view = render_view("", False, result, BackendChoice.WEBVIEW)
    assert not view.visibility_enabled
    assert view.progress_percent == 0

def test_view_depends_only_on_inputs():
    result = EvaluationResult(PasswordStrength.SOMEWHAT_GUESSABLE, 3)
    a = render_view("pw", False, result, BackendChoice.WEBVIEW)
    b = render_view("pw", False, result, BackendChoice.WEBVIEW)
    assert a == b
    assert a.progress_percent == 50
