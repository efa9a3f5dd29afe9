import logging
import time

import pytest

from l5r4.rules import parse_notation


def test_plain_notation():
    res = parse_notation("6k3")
    assert res.dice_pool.as_tuple() == (6, 3, 0)
    assert res.unskilled is False
    assert res.emphasis is False
    assert res.explode_bonus is None


def test_explode_and_bonus():
    res = parse_notation("6k3x10+4")
    assert res.dice_pool.as_tuple() == (6, 3, 4)
    assert res.explode_bonus == 10


@pytest.mark.parametrize(
    "text,unskilled,emphasis",
    [
        ("5k2u", True, False),
        ("5k2x10+1e", False, True),
        ("5K2U", True, False),
    ],
)
def test_flags(text, unskilled, emphasis):
    res = parse_notation(text)
    assert res.unskilled is unskilled
    assert res.emphasis is emphasis


def test_unskilled_checked_before_emphasis():
    res = parse_notation("5k2ue")
    assert res.unskilled is True
    assert res.emphasis is False
    assert res.dice_pool.as_tuple() == (5, 2, 0)


def test_runs_ten_dice_rule():
    assert parse_notation("12k4").dice_pool.as_tuple() == (10, 4, 0)
    assert parse_notation("14k8x10+1").dice_pool.as_tuple() == (10, 10, 3)


def test_two_digit_keep_keeps_its_bonus():
    # 12 kept -> one rise, kept as +2
    res = parse_notation("10k12x10+3")
    assert res.dice_pool.as_tuple() == (10, 10, 5)
    assert res.explode_bonus == 10


def test_emphasis_turns_rises_into_keeps():
    # 18 kept -> 4 rises: three become +2k, the last is +2
    assert parse_notation("10k18").dice_pool.as_tuple() == (10, 10, 2)
    assert parse_notation("10k18e").dice_pool.as_tuple() == (10, 10, 2)


def test_unskilled_discards_rises():
    assert parse_notation("10k18u").dice_pool.as_tuple() == (10, 10, 0)
    assert parse_notation("10k14u").dice_pool.as_tuple() == (10, 10, 0)


@pytest.mark.parametrize("text,expected", [("6k3-2", (6, 3, -2)), ("14k12x10+-1", (14, 12, -1))])
def test_negative_bonus_skips_normalization(text, expected):
    res = parse_notation(text)
    assert res.dice_pool.as_tuple() == expected


def test_negative_bonus_keeps_flags():
    res = parse_notation("14k12-3u")
    assert res.dice_pool.as_tuple() == (14, 12, -3)
    assert res.unskilled is True


def test_little_truths_passes_through():
    assert parse_notation("5k3", little_truths=True).dice_pool.as_tuple() == (5, 3, 2)


@pytest.mark.parametrize("text", ["zzz", "", None, "k", "3k", "abckdef+ghi"])
def test_malformed_notation_never_raises(text):
    res = parse_notation(text)
    assert res.dice_pool.roll_count >= 0


def test_malformed_notation_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="l5r4.rules.notation"):
        res = parse_notation("zzz")
    assert res.dice_pool.as_tuple() == (0, 0, 0)
    assert "zzz" in caplog.text


def test_partial_fields_are_read_best_effort():
    res = parse_notation("7k3x+2")
    assert res.dice_pool.as_tuple() == (7, 3, 2)
    assert res.explode_bonus is None


def test_huge_keep_resolves_without_iterating():
    start = time.perf_counter()
    plain = parse_notation("10k2000000010")
    unskilled = parse_notation("10k2000000010u")
    assert time.perf_counter() - start < 1.0
    # 10**9 rises: 333333333 folds of +2k, one rise left as +2
    assert plain.dice_pool.as_tuple() == (10, 10, 2)
    assert unskilled.dice_pool.as_tuple() == (10, 10, 0)
