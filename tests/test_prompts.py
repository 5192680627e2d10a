import pytest

from bento.models import Mode
from bento.prompts import NOT_PROVIDED, build


@pytest.mark.parametrize("mode", list(Mode))
def test_build_embeds_inputs(mode: Mode) -> None:
    got = build(mode, "にんじん, 豚肉", "きゅうり", "卵, 醤油")
    assert f"モード: {mode.value}" in got
    assert "手元の食材: にんじん, 豚肉" in got
    assert "もらった野菜: きゅうり" in got
    assert "常備食材: 卵, 醤油" in got
    assert NOT_PROVIDED not in got


def test_build_marks_empty_fields_not_provided() -> None:
    got = build(Mode.week, "", "", "卵")
    assert f"手元の食材: {NOT_PROVIDED}" in got
    assert f"もらった野菜: {NOT_PROVIDED}" in got
    assert "常備食材: 卵" in got


@pytest.mark.parametrize(
    "mode,key,other",
    (
        (Mode.week, '"weekData"', '"fiveData"'),
        (Mode.five, '"fiveData"', '"weekData"'),
    ),
)
def test_build_asks_for_mode_schema(mode: Mode, key: str, other: str) -> None:
    got = build(mode, "にんじん", "", "卵")
    assert key in got
    assert other not in got
    assert "JSON" in got
    assert '"recipeUrl"' in got


def test_build_is_pure() -> None:
    assert build(Mode.five, "a", "b", "c") == build(Mode.five, "a", "b", "c")
