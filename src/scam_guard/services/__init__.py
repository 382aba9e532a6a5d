"""Service layer for Scam Guard.

Modules:

* ``prompts`` -- oracle system policy and per-module prompts.
* ``oracle`` -- :class:`ClassificationOracle`, the chat-model client.
* ``session`` -- :class:`AnalysisSession`, per-module state machine.
* ``navigation`` -- :class:`Navigator`, screen and view state machine.
* ``controller`` -- :class:`ScamGuardController`, owner of app-wide state.

Import from the submodules directly; this package does not re-export them
because ``session`` depends on :mod:`scam_guard.graph`, which in turn
depends on ``oracle``.
"""
