import dataclasses
import json

import pytest

from rootfindingAPP.core.iteration_result import (
    BracketRecord,
    FixedPointRecord,
    NewtonRecord,
    records_to_dicts,
    records_to_json,
)


def test_records_are_immutable():
    rec = FixedPointRecord(index=1, absolute_error=0.5, x=1.0, gx=1.5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        rec.gx = 2.0


def test_to_dict_carries_family_and_candidate():
    rec = BracketRecord(index=1, absolute_error=0.139, a=2.8, b=3.0, fa=0.204, fb=-0.5, c=2.9, fc=-0.139, chosen="left")
    data = rec.to_dict()

    assert data["family"] == "bracketing"
    assert data["candidate"] == 2.9
    assert data["chosen"] == "left"
    assert rec.width == pytest.approx(0.2)


def test_json_keeps_full_precision():
    x_next = 2.0945514815423265
    rec = NewtonRecord(index=3, absolute_error=1.7e-05, x=2.094568121104185, fx=1e-4, fpx=11.16, x_next=x_next)
    payload = json.loads(records_to_json([rec]))

    assert payload[0]["x_next"] == x_next
    assert payload[0]["family"] == "newton"
    assert records_to_dicts([rec]) == payload
