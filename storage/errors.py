"""
存储层异常定义
"""


class CharacterStoreError(Exception):
    """角色存储相关异常的基类"""


class StorageError(CharacterStoreError):
    """底层存储故障：约束冲突、连接断开、磁盘错误、时间格式错误等

    原始异常通过 __cause__ 保留。
    """


class PackageInUseError(CharacterStoreError):
    """规则包仍被角色引用，拒绝删除"""

    def __init__(self, package_name: str, character_ids: list[int]):
        self.package_name = package_name
        self.character_ids = character_ids
        super().__init__(
            f'Package "{package_name}" is used by {len(character_ids)} character(s) and cannot be deleted'
        )
