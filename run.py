import asyncio
import os
import sys


def main() -> int:
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    try:
        from module_processor import main_loop

        return asyncio.run(main_loop())
    except KeyboardInterrupt:
        print("\n\n🚨 The program has been stopped. The terminal is ready for commands.")
        return 130
    except Exception as e:
        print(f"\n\n❌ Error: {str(e)}")
        return 1
    finally:
        if sys.platform != "win32" and sys.stdin.isatty():
            os.system("stty sane")


if __name__ == "__main__":
    sys.exit(main())
