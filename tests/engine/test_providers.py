from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from simopts.core.handlers import CallbackHandler
from simopts.core.option import Arity, Option
from simopts.engine import provider as provider_module
from simopts.engine.parser import OptionEngine
from simopts.engine.provider import OptionProvider, discover_providers
from simopts.foundation.exceptions import DuplicateOptionError


def _accept(arg):
    return True


class BaseModel:
    """Provider contributing generic options."""

    def __init__(self) -> None:
        self.output = Option("output", CallbackHandler(_accept), arity=Arity.REQUIRED, default="stdout",
                             description="--output <f>  base output")
        self.costs = Option("costparams", CallbackHandler(_accept), arity=Arity.REQUIRED, default="1")
        self.benefits = Option("benefitparams", CallbackHandler(_accept), arity=Arity.REQUIRED, default="1")

    def contribute(self, engine: OptionEngine) -> None:
        engine.add_option(self.output)
        engine.add_option(self.costs)
        engine.add_option(self.benefits)


class ScanModel:
    """Specialization overriding --output and dropping options it supersedes."""

    def __init__(self) -> None:
        self.output = Option("output", CallbackHandler(_accept), arity=Arity.REQUIRED, default="scan.dat",
                             description="--output <f>  scan output")
        self.bins = Option("bins", CallbackHandler(_accept), arity=Arity.REQUIRED, default="100")

    def contribute(self, engine: OptionEngine) -> None:
        engine.add_option(self.output)
        engine.add_option(self.bins)


class Pruner:
    def contribute(self, engine: OptionEngine) -> None:
        engine.remove_options(["costparams", "benefitparams"])


def test_providers_satisfy_protocol():
    assert isinstance(BaseModel(), OptionProvider)


def test_first_registration_wins(caplog):
    scan, base = ScanModel(), BaseModel()
    engine = OptionEngine([scan, base])
    with caplog.at_level(logging.WARNING):
        engine.initialize()
    assert engine.get_option("output") is scan.output
    assert engine.get_option("output").get_description().startswith("--output <f>  scan output")
    assert "base output" not in engine.help()
    duplicates = [issue for issue in engine.issues if isinstance(issue, DuplicateOptionError)]
    assert [issue.option for issue in duplicates] == ["output"]
    assert "option --output overridden" in caplog.text


def test_options_sorted_alphabetically():
    engine = OptionEngine([ScanModel(), BaseModel()])
    engine.initialize()
    assert [option.name for option in engine.options] == ["benefitparams", "bins", "costparams", "output"]


def test_pruning_provider_removes_inherited_options():
    engine = OptionEngine([ScanModel(), BaseModel(), Pruner()])
    engine.initialize()
    assert not engine.provides("costparams")
    assert "benefitparams" not in engine
    assert len(engine) == 2


def test_remove_option_by_instance_and_name():
    base = BaseModel()
    engine = OptionEngine([base])
    engine.initialize()
    stranger = Option("output", CallbackHandler(_accept), arity=Arity.REQUIRED)
    assert not engine.remove_option(stranger)
    assert engine.remove_option(base.output)
    assert not engine.remove_option("output")
    assert not engine.remove_options(["costparams", "missing"])
    assert engine.provides("benefitparams")


def test_initialize_rebuilds_and_resets():
    base = BaseModel()
    engine = OptionEngine([base])
    engine.initialize()
    engine.parse_all(["--output", "run.dat"])
    assert base.output.is_set
    engine.remove_option("costparams")
    engine.initialize()
    assert engine.provides("costparams")
    assert not base.output.is_set
    assert base.output.get_arg() == "stdout"


def test_add_option_twice_is_noop():
    base = BaseModel()
    engine = OptionEngine([base])
    engine.initialize()
    engine.parse_all(["--output", "run.dat"])
    assert engine.add_option(base.output)
    assert base.output.get_arg() == "run.dat"


def test_engine_reset():
    base = BaseModel()
    engine = OptionEngine([base])
    engine.initialize()
    engine.parse_all(["--output", "run.dat"])
    engine.reset()
    assert not base.output.is_set


def test_provider_list_management():
    base, scan = BaseModel(), ScanModel()
    engine = OptionEngine([base])
    assert not engine.add_provider(base)
    assert not engine.add_provider(None)
    assert engine.add_provider(scan)
    assert engine.providers == (base, scan)
    assert engine.remove_provider(base)
    assert not engine.remove_provider(base)
    assert engine.providers == (scan,)


class TestDiscovery:
    def _entry(self, name, target):
        def load():
            if isinstance(target, Exception):
                raise target
            return target

        return SimpleNamespace(name=name, value=f"tests:{name}", load=load)

    def test_loads_factories_and_instances(self, monkeypatch):
        instance = BaseModel()
        entries = [self._entry("b_scan", ScanModel), self._entry("a_base", instance)]
        monkeypatch.setattr(provider_module.metadata, "entry_points", lambda group: entries)
        providers = discover_providers()
        assert providers[0] is instance
        assert isinstance(providers[1], ScanModel)

    def test_broken_entry_points_are_skipped(self, monkeypatch, caplog):
        entries = [self._entry("broken", ImportError("missing module")), self._entry("odd", lambda: object())]
        monkeypatch.setattr(provider_module.metadata, "entry_points", lambda group: entries)
        with caplog.at_level(logging.WARNING):
            assert discover_providers() == []
        assert "broken" in caplog.text
        assert "odd" in caplog.text


@pytest.mark.parametrize("order", [(0, 1), (1, 0)])
def test_override_depends_only_on_provider_order(order):
    models = (ScanModel(), BaseModel())
    engine = OptionEngine([models[i] for i in order])
    engine.initialize()
    assert engine.get_option("output") is models[order[0]].output
