"""
Scan inline text for sensitive data
"""
import asyncio
from nightfall import NightfallClient, ScanTextRequest


async def main():
    # Reads the API key from NIGHTFALL_API_KEY
    async with NightfallClient() as nightfall:

        response = await nightfall.scan_text(ScanTextRequest(
            payload=["my card is 4242-4242-4242-4242", "nothing to see here"],
            policy_uuids=["<your policy uuid>"]
        ))

        for index, findings in enumerate(response.findings):
            print(f"Item {index}: {len(findings)} finding(s)")
            for finding in findings:
                print(f"  {finding['detector']['name']}: {finding['finding']}")


if __name__ == "__main__":
    asyncio.run(main())
