"""
初始化角色数据库表的脚本

用法: python scripts/init_character_tables.py [数据库URL]
未给出URL时使用配置中的 SQLALCHEMY_URL
"""
# 标准库导包
import asyncio
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# 项目内部导包
from config import settings
from storage import Database, StorageError


async def main(url: str) -> int:
    """主函数"""
    print(f"开始初始化角色数据表: {url}")

    database = Database(url)
    try:
        await database.init_db()
        print("✓ 数据表创建成功！")

        print("\n已创建的数据表：")
        print("  1. characters - 角色表")
        print("  2. tags - 标签表")
        print("  3. packages - 规则包表")
        print("  4. character_tags - 角色标签关联表")
        print("  5. character_package - 角色规则包关联表")
        print("  6. character_backups - 角色备份表")

    except StorageError as e:
        print(f"✗ 初始化失败: {str(e)}")
        return 1

    finally:
        # 清理数据库连接
        await database.cleanup_db()

    return 0


if __name__ == "__main__":
    target_url = sys.argv[1] if len(sys.argv) > 1 else settings.SQLALCHEMY_URL
    exit_code = asyncio.run(main(target_url))
    sys.exit(exit_code)
