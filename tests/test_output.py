"""Tests for logweave.output — the Logger façade over the hook pipeline."""

import json

import pytest

from logweave.lib.hook_lib import (
    AFTER_LOG, BEFORE_LOG, ON_ERROR, DEFAULT_PRIORITY, HookManager, LogEntry,
)
from logweave.output import Logger, create_logger


# ---------------------------------------------------------------------------
# Rendering and verbosity
# ---------------------------------------------------------------------------
class TestRendering:
    """Records are written as one line each."""

    @pytest.mark.asyncio
    async def test_basic_line(self, logger, buf):
        await logger.info("hello")
        assert buf.getvalue() == "INFO hello\n"

    @pytest.mark.asyncio
    async def test_prefix_and_extra_args(self, buf, hooks):
        log = Logger(prefix="app", file=buf, hooks=hooks, timestamps=False)
        await log.warn("disk", 91, "%")
        assert buf.getvalue() == "WARN [app] disk 91 %\n"

    @pytest.mark.asyncio
    async def test_timestamp_included(self, buf):
        log = Logger(file=buf)
        entry = await log.info("stamped")
        assert buf.getvalue().startswith(f"[{entry.timestamp}] INFO")

    @pytest.mark.asyncio
    async def test_defaults_to_stdout(self, capsys):
        await Logger(timestamps=False).error("to stdout")
        assert capsys.readouterr().out == "ERROR to stdout\n"

    @pytest.mark.asyncio
    async def test_verbosity_filters(self, buf, hooks, calls):
        hooks.on(BEFORE_LOG, lambda e: calls.append(e["level"]))
        log = Logger(verbosity="warn", file=buf, hooks=hooks, timestamps=False)
        assert await log.info("hidden") is None
        await log.critical("shown")
        assert buf.getvalue() == "CRITICAL shown\n"
        assert calls == ["critical"]

    @pytest.mark.asyncio
    async def test_silent(self, buf):
        log = Logger(verbosity="silent", file=buf)
        await log.critical("nothing")
        assert buf.getvalue() == ""

    def test_bad_verbosity_rejected(self):
        with pytest.raises(ValueError):
            Logger(verbosity="chatty")


# ---------------------------------------------------------------------------
# Pipeline integration
# ---------------------------------------------------------------------------
class TestPipelineIntegration:
    """Hooks and middleware shape what gets written."""

    @pytest.mark.asyncio
    async def test_before_log_rewrites_message(self, logger, buf):
        logger.on(BEFORE_LOG, lambda e: {"message": e["message"].replace("secret", "***")})
        entry = await logger.info("token=secret")
        assert buf.getvalue() == "INFO token=***\n"
        assert isinstance(entry, LogEntry)
        assert entry.message == "token=***"

    @pytest.mark.asyncio
    async def test_context_and_correlation_id(self, logger):
        entry = await logger.info("saved", correlation_id="req-9", rows=3)
        assert entry.correlation_id == "req-9"
        assert entry.context == {"rows": 3}
        assert entry.args == ["saved"]

    @pytest.mark.asyncio
    async def test_middleware_enrichment_reaches_after_log(self, logger):
        seen = []

        async def enrich(e, next_):
            e.setdefault("context", {})["host"] = "web-1"
            await next_()

        logger.use(enrich)
        logger.on(AFTER_LOG, seen.append)
        await logger.info("hi")
        assert seen[0]["context"] == {"host": "web-1"}

    @pytest.mark.asyncio
    async def test_halting_middleware_still_writes(self, logger, buf):
        async def stop(e, next_):
            e["message"] = "stopped here"

        async def never(e, next_):
            e["message"] = "unreachable"

        logger.use(stop, priority=90)
        logger.use(never, priority=10)
        await logger.info("original")
        assert buf.getvalue() == "INFO stopped here\n"

    @pytest.mark.asyncio
    async def test_middleware_failure_reported_and_dropped(self, logger, buf, errbuf, calls):
        async def broken(e, next_):
            raise RuntimeError("enricher down")

        logger.use(broken)
        logger.on(AFTER_LOG, lambda e: calls.append("after"))
        assert await logger.info("lost") is None
        assert buf.getvalue() == ""
        assert "Log middleware failed: RuntimeError: enricher down" in errbuf.getvalue()
        assert calls == []

    @pytest.mark.asyncio
    async def test_middleware_stripping_fields(self, logger, buf, calls):
        """A middleware that pops message and level does not break the log call."""
        async def strip(e, next_):
            e.pop("message")
            e.pop("level")
            await next_()

        logger.use(strip)
        logger.on(AFTER_LOG, lambda e: calls.append("after"))
        entry = await logger.warn("hi")
        assert isinstance(entry, LogEntry)
        assert entry.message == ""
        assert entry.level == "warn"
        assert buf.getvalue() == "WARN \n"
        assert calls == ["after"]

    def test_pass_through_default_priority(self, logger):
        """Façade registrations default to the same priority as HookManager's."""
        sub = logger.on(BEFORE_LOG, lambda e: None)
        mw = logger.use(lambda e, next_: None)
        assert sub.registration.priority == DEFAULT_PRIORITY
        assert mw.registration.priority == DEFAULT_PRIORITY

    @pytest.mark.asyncio
    async def test_hook_failure_does_not_block_output(self, logger, buf):
        errors = []

        def broken(e):
            raise ValueError("bad hook")

        logger.on(BEFORE_LOG, broken)
        logger.on(ON_ERROR, errors.append)
        await logger.info("still here")
        assert buf.getvalue() == "INFO still here\n"
        assert errors[0]["hook_event"] == BEFORE_LOG

    @pytest.mark.asyncio
    async def test_once_and_off_pass_through(self, logger, calls):
        def tag(e):
            calls.append("tag")

        logger.once(BEFORE_LOG, lambda e: calls.append("once"))
        logger.on(AFTER_LOG, tag)
        await logger.info("a")
        assert logger.off(AFTER_LOG, tag) is True
        await logger.info("b")
        assert calls == ["once", "tag"]


# ---------------------------------------------------------------------------
# Scoping
# ---------------------------------------------------------------------------
class TestScoped:
    """Scoped loggers combine prefixes and share hooks."""

    @pytest.mark.asyncio
    async def test_prefix_chain(self, buf, hooks):
        root = Logger(prefix="app", file=buf, hooks=hooks, timestamps=False)
        await root.scoped("db").scoped("pool").info("ready")
        assert buf.getvalue() == "INFO [app:db:pool] ready\n"

    @pytest.mark.asyncio
    async def test_scoped_without_parent_prefix(self, logger, buf):
        await logger.scoped("worker").debug("tick")
        assert buf.getvalue() == "DEBUG [worker] tick\n"

    def test_shares_hooks(self, logger):
        child = logger.scoped("child")
        assert child.hooks is logger.hooks
        child.on(BEFORE_LOG, lambda e: None)
        assert logger.hooks.get_stats()["hooks"][BEFORE_LOG] == 1


# ---------------------------------------------------------------------------
# create_logger
# ---------------------------------------------------------------------------
class TestCreateLogger:
    """create_logger builds from resolved config."""

    def test_overrides(self, tmp_config_home, tmp_project, buf):
        log = create_logger(file=buf, start_dir=tmp_project,
                            verbosity="error", prefix="svc")
        assert log.verbosity == "error"
        assert log.prefix == "svc"
        assert log.timestamps is True

    def test_project_config_used(self, tmp_config_home, tmp_project):
        (tmp_project / ".logweave.json").write_text(
            json.dumps({"verbosity": "debug", "timestamps": False}))
        log = create_logger(start_dir=tmp_project)
        assert log.verbosity == "debug"
        assert log.timestamps is False

    def test_injected_hooks(self, tmp_config_home, tmp_project):
        shared = HookManager()
        log = create_logger(hooks=shared, start_dir=tmp_project)
        assert log.hooks is shared
