import hashlib
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List
from uuid import uuid4

from chat_memory.config.settings import settings
from chat_memory.domain.conversation import ConversationStore
from chat_memory.domain.exceptions import StorageError
from chat_memory.domain.models import Message, format_timestamp


class JsonConversationStore(ConversationStore):
    """每个会话一个 JSON 文档的持久化存储。

    文件名取 session_id 的 sha256，任意字符串都可作为会话键。
    写入先落到临时文件并 fsync，再 os.replace 覆盖目标文件，
    因此 put 成功后的内容在进程重启后仍然可见，写到一半的文档永远不可见。
    """

    def __init__(self, root: str | Path | None = None):
        self._root = Path(root or settings.storage_root).resolve()
        self._sessions_root = self._root / "sessions"
        self._sessions_root.mkdir(parents=True, exist_ok=True)

    def get(self, session_id: str) -> List[Message]:
        path = self._path_for(session_id)
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"session document is not an object: {type(data).__name__}")
            return [Message.from_dict(item) for item in data.get("messages") or []]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise StorageError(code="STORE_READ_ERROR", message=str(e), session_id=session_id)

    def put(self, session_id: str, messages: List[Message]) -> None:
        path = self._path_for(session_id)
        tmp_path = path.with_name(f"{path.stem}.{uuid4().hex}.json.tmp")
        obj: Dict[str, Any] = {
            "session_id": session_id,
            "updated_at": format_timestamp(datetime.now(timezone.utc)),
            "messages": [m.to_dict() for m in messages],
        }
        try:
            with tmp_path.open("w", encoding="utf-8") as f:
                f.write(json.dumps(obj, ensure_ascii=False))
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
            self._fsync_dir()
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(code="STORE_WRITE_ERROR", message=str(e), session_id=session_id)

    def _fsync_dir(self) -> None:
        # 目录项落盘后 rename 才能扛住主机崩溃；Windows 不支持打开目录
        if os.name != "posix":
            return
        fd = os.open(self._sessions_root, os.O_RDONLY)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)

    def _path_for(self, session_id: str) -> Path:
        digest = hashlib.sha256(session_id.encode("utf-8")).hexdigest()
        return self._sessions_root / f"{digest}.json"
