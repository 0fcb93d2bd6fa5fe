"""测试 iog.core.formatter 模块。"""

import json
from dataclasses import dataclass
from datetime import datetime

import pytest

from iog.core.errors import SerializationError
from iog.core.formatter import (
    error_message,
    format_date,
    format_record,
    format_timestamp,
    hash_body,
    make_record,
    render_body,
    serialize,
)
from iog.core.types import SEPARATOR, LogRecord

NOW = datetime(2026, 10, 18, 9, 5, 3, 7000)


class WithMessage:
    """暴露 message 属性的类错误对象。"""

    def __init__(self, message):
        self.message = message


@dataclass
class Point:
    x: int
    y: int


class TestTimestamps:
    """测试时间戳与日期格式化。"""

    def test_timestamp_has_milliseconds(self):
        """测试时间戳格式为 yyyy-mm-dd HH:MM:ss:l。"""
        assert format_timestamp(NOW) == "2026-10-18 09:05:03:007"

    def test_timestamp_zero_milliseconds(self):
        """测试毫秒为 0 时补齐三位。"""
        assert format_timestamp(datetime(2026, 1, 2, 23, 59, 59)) == (
            "2026-01-02 23:59:59:000"
        )

    def test_format_date(self):
        """测试日期格式化。"""
        assert format_date(NOW) == "2026-10-18"


class TestErrorMessage:
    """测试类错误值的能力检查。"""

    def test_exception_uses_str(self):
        """测试异常取 str(exc)。"""
        assert error_message(ValueError("boom")) == "boom"

    def test_empty_exception_falls_back_to_class_name(self):
        """测试没有消息的异常退回到类名。"""
        assert error_message(RuntimeError()) == "RuntimeError"

    def test_object_with_message_attribute(self):
        """测试带字符串 message 属性的对象被视为类错误值。"""
        assert error_message(WithMessage("disk full")) == "disk full"

    def test_non_string_message_is_ignored(self):
        """测试 message 不是字符串时不视为类错误值。"""
        assert error_message(WithMessage(42)) is None

    def test_dict_with_message_key_is_not_error(self):
        """测试包含 message 键的字典仍按结构化值处理。"""
        assert error_message({"message": "hi"}) is None

    def test_plain_values(self):
        """测试普通值返回 None。"""
        assert error_message("text") is None
        assert error_message(3) is None


class TestSerialize:
    """测试结构化值序列化。"""

    def test_compact_json(self):
        """测试默认输出紧凑 JSON。"""
        assert serialize({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'

    def test_pretty_json(self):
        """测试 indent=2 的美化输出。"""
        assert serialize({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_dataclass(self):
        """测试 dataclass 可以序列化。"""
        assert json.loads(serialize(Point(1, 2))) == {"x": 1, "y": 2}

    def test_circular_reference(self):
        """测试循环引用抛出 SerializationError。"""
        data = {}
        data["self"] = data
        with pytest.raises(SerializationError):
            serialize(data)

    def test_unknown_type(self):
        """测试无法识别的对象抛出 SerializationError。"""
        with pytest.raises(SerializationError, match="cannot serialize"):
            serialize(object())


class TestRenderBody:
    """测试标准模式下消息正文的渲染。"""

    def test_string_unchanged(self):
        """测试字符串原样输出。"""
        assert render_body("hello") == "hello"

    def test_error_uses_message(self):
        """测试异常只输出其消息文本。"""
        assert render_body(KeyError("missing")) == "'missing'"
        assert render_body(ValueError("bad value")) == "bad value"

    def test_structured_value_pretty_printed(self):
        """测试结构化值使用两空格缩进序列化。"""
        assert render_body({"id": 7}) == '{\n  "id": 7\n}'

    def test_scalars(self):
        """测试非字符串标量按 JSON 输出。"""
        assert render_body(5) == "5"
        assert render_body(None) == "null"
        assert render_body(True) == "true"


class TestFormatRecord:
    """测试记录渲染。"""

    def test_standard_template(self):
        """测试标准模式的多行块格式。"""
        record = make_record("svc", NOW, "info", "hello")
        text = format_record(record)
        assert text == (
            "CONTEXT: svc\nDATE: 2026-10-18 09:05:03:007\nTYPE: info\nBODY:\n\nhello"
            + SEPARATOR
        )

    def test_custom_separator(self):
        """测试自定义分隔符。"""
        record = make_record("svc", NOW, "log", "x")
        assert format_record(record, separator="\n#\n").endswith("BODY:\n\nx\n#\n")

    def test_compact_single_line(self):
        """测试精简模式输出单行 JSON 并以换行结尾。"""
        message = {"user": "ann", "tags": ["a", "b"]}
        record = make_record("svc", NOW, "warn", message, slim=True)
        text = format_record(record, slim=True)

        assert text.endswith("\n")
        assert text.count("\n") == 1
        data = json.loads(text)
        assert list(data) == ["CONTEXT", "DATE", "TYPE", "BODY"]
        assert data["CONTEXT"] == "svc"
        assert data["DATE"] == "2026-10-18 09:05:03:007"
        assert data["TYPE"] == "warn"
        assert data["BODY"] == message

    def test_compact_error_body(self):
        """测试精简模式下异常以消息文本输出。"""
        record = make_record("svc", NOW, "error", ValueError("boom"), slim=True)
        assert json.loads(format_record(record, slim=True))["BODY"] == "boom"

    def test_hash_in_standard_mode(self):
        """测试开启哈希后标准模式包含 HASH 行。"""
        record = make_record("svc", NOW, "info", "hello", with_hash=True)
        text = format_record(record)
        assert f"TYPE: info\nHASH: {hash_body('hello')}\nBODY:" in text

    def test_hash_in_compact_mode(self):
        """测试开启哈希后精简模式包含 HASH 键。"""
        record = make_record("svc", NOW, "info", {"a": 1}, slim=True, with_hash=True)
        data = json.loads(format_record(record, slim=True))
        assert data["HASH"] == hash_body('{\n  "a": 1\n}')

    def test_no_hash_by_default(self):
        """测试默认不计算哈希。"""
        record = make_record("svc", NOW, "info", "hello")
        assert isinstance(record, LogRecord)
        assert record.hash is None
        assert "HASH" not in format_record(record)

    def test_hash_is_sha256_hex(self):
        """测试哈希为 64 位十六进制 sha256。"""
        digest = hash_body("hello")
        assert digest == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )
