import asyncio
import os

from dotenv import load_dotenv

from folderindex import FolderIndex, FolderIndexConfig, OutlineStatus

# Load environment variables
load_dotenv()


async def main():
    # Attach to a browser started with --remote-debugging-port=9222 so the
    # existing login session is reused
    config = FolderIndexConfig(
        start_url=os.getenv("FOLDERINDEX_START_URL"),
        verbose=1,
        local_browser_launch_options={"cdp_url": os.getenv("CDP_URL", "http://localhost:9222")},
    )

    folder_index = FolderIndex(config)

    try:
        print("\nConnecting to the browser...")
        await folder_index.init()

        # Wait until the document's folder path is rendered
        await folder_index.wait_until_ready()

        result = await folder_index.run()
        if result.status == OutlineStatus.COMPLETE:
            print("\nGenerated index:")
            print(result.text)
        else:
            print(f"\nNo index copied: {result.message}")

    except Exception as e:
        print(f"Error: {str(e)}")
        raise
    finally:
        await folder_index.close()


if __name__ == "__main__":
    asyncio.run(main())
