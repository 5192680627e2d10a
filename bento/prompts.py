from bento.models import Mode, Subject


NOT_PROVIDED = "未入力"

PREAMBLE = """
あなたは日本の家庭料理に詳しい管理栄養士です。
お弁当の献立を考えてください。
主菜と副菜にはそれぞれ参考になるレシピのURLを付けてください。""".strip()

CONDITIONS = """
条件:
- モード: {mode}
- 手元の食材: {ingredients}
- もらった野菜: {grandma_vegetables}
- 常備食材: {usual_ingredients}""".strip()

WEEK_FORMAT = """
一週間分の献立を作ってください。作り置きと買い物をまとめられるようにしてください。
次の形のJSONオブジェクトだけを厳密に出力してください。JSON以外の文章は含めないでください。

{"weekData": {"days": [{"day": "曜日", "point": "その日のポイント",
"mains": [{"name": "料理名", "recipeUrl": "URL"}],
"sides": [{"name": "料理名", "recipeUrl": "URL"}]}],
"shoppingList": ["買う食材"], "prepList": ["週末の下ごしらえ"]}}""".strip()

FIVE_FORMAT = """
それぞれ独立した5日分のお弁当を作ってください。
次の形のJSONオブジェクトだけを厳密に出力してください。JSON以外の文章は含めないでください。

{"fiveData": [{"name": "お弁当の名前", "description": "説明",
"makeAhead": "前日にできる準備", "point": "ポイント",
"mains": [{"name": "料理名", "recipeUrl": "URL"}],
"sides": [{"name": "料理名", "recipeUrl": "URL"}]}]}""".strip()

BENTO_MENU_PROMPT = """{preamble}

{conditions}

{format}"""

FORMATS = {
    Mode.week: WEEK_FORMAT,
    Mode.five: FIVE_FORMAT,
}

VISION_INSTRUCTIONS = {
    Subject.receipt: "このレシートから食材名だけを日本語で列挙してください",
    Subject.food: "この画像に写っている食材を日本語で列挙してください",
}


class BentoMenuPrompt:
    def __init__(
        self,
        mode: Mode,
        *,
        ingredients: str,
        grandma_vegetables: str,
        usual_ingredients: str,
        preamble: str | None = None,
    ) -> None:
        self.mode = mode
        self.ingredients = ingredients or NOT_PROVIDED
        self.grandma_vegetables = grandma_vegetables or NOT_PROVIDED
        self.usual_ingredients = usual_ingredients
        self.preamble = PREAMBLE if preamble is None else preamble

    def __str__(self) -> str:
        conditions = CONDITIONS.format(
            mode=self.mode.value,
            ingredients=self.ingredients,
            grandma_vegetables=self.grandma_vegetables,
            usual_ingredients=self.usual_ingredients,
        )
        return BENTO_MENU_PROMPT.format(
            preamble=self.preamble,
            conditions=conditions,
            format=FORMATS[self.mode],
        )


def build(
    mode: Mode,
    ingredients: str,
    grandma_vegetables: str,
    usual_ingredients: str,
) -> str:
    """Generation request for `mode`. Empty fields are marked as not provided."""
    prompt = BentoMenuPrompt(
        mode,
        ingredients=ingredients,
        grandma_vegetables=grandma_vegetables,
        usual_ingredients=usual_ingredients,
    )
    return str(prompt)
