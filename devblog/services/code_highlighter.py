from __future__ import annotations
import contextlib
from typing import Any, Optional

from pygments import lex
from pygments.lexers import get_lexer_by_name
from pygments.token import Token

from devblog.ui.theme import DARK_THEME, ThemeColors

END = "end"

TOKEN_TAGS = (
    "code_kw",
    "code_key",
    "code_name",
    "code_str",
    "code_num",
    "code_cmt",
    "code_op",
    "code_punc",
    "code_var",
)


class CodeHighlighter:
    """Colors a Tk Text widget's content with pygments tokens.

    One instance per editor: ``language`` is any pygments lexer alias
    (``yaml`` for the manifest, ``bash`` for the commands).
    """

    # Skip very large buffers for responsiveness
    MAX_CHARS = 20000

    def __init__(self, language: str, theme: Optional[ThemeColors] = None) -> None:
        self.language = language
        self.theme: ThemeColors = theme or DARK_THEME
        self.lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
        self._configured_widget_id: Optional[int] = None

    def _idx(self, char_index: int) -> str:
        return f"1.0+{char_index}c"

    def configure_tags(self, text: Any) -> None:
        """Configure tag colors. Call once per Text widget."""
        if self._configured_widget_id == id(text):
            return
        t = self.theme
        text.tag_config("code_kw", foreground=t.code_kw_fg)
        text.tag_config("code_key", foreground=t.code_key_fg)
        text.tag_config("code_name", foreground=t.code_name_fg)
        text.tag_config("code_str", foreground=t.code_str_fg)
        text.tag_config("code_num", foreground=t.code_num_fg)
        text.tag_config("code_cmt", foreground=t.code_cmt_fg)
        text.tag_config("code_op", foreground=t.code_op_fg)
        text.tag_config("code_punc", foreground=t.code_punc_fg)
        text.tag_config("code_var", foreground=t.code_var_fg)
        with contextlib.suppress(Exception):
            text.tag_raise("sel")
        self._configured_widget_id = id(text)

    @staticmethod
    def tag_for(tok_type: Any) -> Optional[str]:
        if tok_type in Token.Comment:
            return "code_cmt"
        if tok_type in Token.Keyword:
            return "code_kw"
        if tok_type in Token.Name.Tag or tok_type in Token.Name.Attribute:
            return "code_key"
        if tok_type in Token.Name.Variable:
            return "code_var"
        if tok_type in Token.Name or tok_type in Token.Literal.Scalar:
            return "code_name"
        if tok_type in Token.String:
            return "code_str"
        if tok_type in Token.Number:
            return "code_num"
        if tok_type in Token.Operator:
            return "code_op"
        if tok_type in Token.Punctuation:
            return "code_punc"
        return None

    def clear(self, text: Any) -> None:
        for tag in TOKEN_TAGS:
            text.tag_remove(tag, "1.0", END)

    def highlight(self, text: Any) -> None:
        self.configure_tags(text)
        self.clear(text)
        content = text.get("1.0", END)
        if len(content) > self.MAX_CHARS:
            return
        offset = 0
        for tok_type, tok_text in lex(content, self.lexer):
            if not tok_text:
                continue
            tag = self.tag_for(tok_type)
            # Whitespace tokens only add tag churn
            if tag and not tok_text.isspace():
                text.tag_add(tag, self._idx(offset), self._idx(offset + len(tok_text)))
            offset += len(tok_text)
