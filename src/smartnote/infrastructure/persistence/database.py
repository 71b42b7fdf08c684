"""Database management."""

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

# Import models to register them with SQLModel metadata
from smartnote.infrastructure.persistence import models as _models  # noqa: F401
from smartnote.infrastructure.persistence.exceptions import DatabaseError


class DatabaseManager:
    """データベース管理

    SQLite データベースの初期化、エンジン生成、セッション管理を行う。
    """

    def __init__(self, database_path: str) -> None:
        """初期化

        Args:
            database_path: SQLite データベースファイルのパス
                          ":memory:" を指定するとインメモリDBを使用
        """
        self._database_path = database_path
        self._engine: Engine | None = None

    def get_engine(self) -> Engine:
        """SQLAlchemy エンジンを取得する

        エンジンは遅延初期化され、キャッシュされる。
        データベースファイルの親ディレクトリが存在しない場合は自動作成する。

        Returns:
            Engine インスタンス
        """
        if self._engine is not None:
            return self._engine

        # Create parent directory for non-memory databases
        if self._database_path != ":memory:":
            db_path = Path(self._database_path)
            db_path.parent.mkdir(parents=True, exist_ok=True)
            url = f"sqlite:///{self._database_path}"
        else:
            url = "sqlite://"

        self._engine = create_engine(url)
        return self._engine

    def create_tables(self) -> None:
        """テーブルを作成する

        既存のテーブルがある場合は何もしない。

        Raises:
            DatabaseError: データベースを開けない場合
        """
        try:
            SQLModel.metadata.create_all(self.get_engine())
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to create tables: {e}") from e

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """セッションを取得する（context manager）

        Yields:
            Session インスタンス
        """
        with Session(self.get_engine(), expire_on_commit=False) as session:
            yield session

    def close(self) -> None:
        """エンジンを破棄する"""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
