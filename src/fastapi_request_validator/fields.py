"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: fields.py
@DateTime: 2026-02-09
@Docs: Field records, source kinds and data types.
字段记录、来源类型与数据类型。
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, BinaryIO

if TYPE_CHECKING:
    from fastapi_request_validator.sources import UploadHandle


class SourceKind(StrEnum):
    """Request channel a field is read from.
    字段读取的请求通道。
    """

    QUERY_STRING = "query-string"
    URL_PARAM = "url-param"
    FORM_DATA = "form-data"
    FORM_URLENCODED = "form-urlencoded"
    MULTIPART_FILE = "multipart-file"


class DataType(StrEnum):
    """Requested data type, used to word error messages.
    请求的数据类型，用于组织错误消息。
    """

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    FILE = "file"


DEFAULT_DATA_TYPE = DataType.STRING

type FieldValue = str | int | float | None


def get_file_extension(file_name: str) -> str:
    """
    Return the lowercase extension after the last dot.
    返回最后一个点之后的小写扩展名。

    Args:
        file_name: File name.
            文件名。

    Returns:
        str: Extension without the dot, or an empty string.
        str: 不含点的扩展名；无扩展名时返回空字符串。

    Examples:
        >>> get_file_extension("a.b.TAR")
        'tar'
        >>> get_file_extension("noext")
        ''
    """
    _, dot, ext = str(file_name or "").rpartition(".")
    if not dot:
        return ""
    return ext.lower()


@dataclass(slots=True)
class Field:
    """One named input under validation.
    一个正在校验的具名输入。

    Attributes:
        name: Field name, unique within a validator.
            字段名，在校验器内唯一。
        source_kind: Where the raw value was read from.
            原始值的来源。
        value: Text for non-file sources, None for files, coerced value after success.
            非文件来源为字符串，文件来源为 None，转换成功后为转换值。
        upload: Borrowed upload handle (file sources only).
            借用的上传句柄（仅文件来源）。
        file_name: Upload file name.
            上传文件名。
        file_extension: Lowercase upload extension.
            上传文件的小写扩展名。
        data_type: Data type of the last coercion.
            最近一次类型转换的数据类型。
        default_value: Fallback recorded by ``default()``.
            ``default()`` 记录的回退值。
        error_message: Accumulated error, empty when valid.
            累积的错误消息，有效时为空。
        required: Whether the field is required.
            是否必填。
    """

    name: str
    source_kind: SourceKind | str
    value: FieldValue = None
    upload: "UploadHandle | None" = None
    file_name: str = ""
    file_extension: str = ""
    data_type: DataType = DEFAULT_DATA_TYPE
    default_value: str = ""
    error_message: str = ""
    required: bool = False

    @property
    def has_error(self) -> bool:
        return self.error_message != ""

    @property
    def is_blank(self) -> bool:
        """Presence rule used by ``required()``: no text and no upload.
        ``required()`` 使用的存在性规则：无文本且无上传。
        """
        text_missing = self.value is None or self.value == ""
        return text_missing and self.upload is None

    @property
    def is_absent(self) -> bool:
        """Presence rule used by ``done()``: an empty string still counts as present.
        ``done()`` 使用的存在性规则：空字符串仍视为存在。
        """
        return self.value is None and self.upload is None

    def append_error(self, message: str) -> None:
        """
        Append a coercion failure for the current data type.
        为当前数据类型追加转换失败消息。

        Args:
            message: Suffix used when an error already exists, e.g. ``"must be int"``.
                已有错误时使用的后缀，例如 ``"must be int"``。
        """
        if self.error_message == "":
            self.error_message = f"{self.name} {message}"
        else:
            self.error_message = f"{self.error_message} and the value {message}"


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """Opened upload returned by ``Validator.file()``.
    ``Validator.file()`` 返回的已打开上传文件。

    The content stream belongs to the transport layer; the validator never closes it.
    内容流归传输层所有；校验器不会关闭它。
    """

    content: BinaryIO | None
    name: str
    extension: str
