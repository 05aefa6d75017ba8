"""
Upload a file in chunks and trigger a scan
"""
import asyncio
import logging

from nightfall import NightfallClient, NightfallException, ScanFileRequest, setup_logging


async def main():
    logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s %(message)s")
    setup_logging(logging.INFO)

    config = NightfallClient.create_config(file_upload_concurrency=4)

    async with NightfallClient(config=config) as nightfall:

        # Scan a file from disk
        def on_progress(progress):
            print(f"Progress: {progress.percentage:.1f}%")

        response = await nightfall.scan_file_path(
            "report.pdf",
            policy_uuid="<your policy uuid>",
            request_metadata="quarterly report",
            timeout=300,
            progress_callback=on_progress
        )
        print(f"Scan started: {response.id} {response.message}")

        # Scan in-memory content with an inline policy
        content = b"ssn 123-45-6789"
        policy = {
            "detectionRules": [{
                "name": "SSN",
                "logicalOp": "ANY",
                "detectors": [{
                    "detectorType": "NIGHTFALL_DETECTOR",
                    "nightfallDetector": "US_SOCIAL_SECURITY_NUMBER",
                    "minConfidence": "LIKELY",
                    "minNumFindings": 1,
                    "displayName": "SSN"
                }]
            }],
            "alertConfig": {"url": {"address": "https://example.com/nightfall-webhook"}}
        }
        try:
            response = await nightfall.scan_file(ScanFileRequest(
                content=content,
                content_size_bytes=len(content),
                policy=policy
            ))
            print(f"Scan started: {response.id}")
        except NightfallException as e:
            print(f"Scan failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
