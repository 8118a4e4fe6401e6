"""
Test Client for the Citro Voice API.
Simple script to exercise the API endpoints against a running server.
"""

import asyncio
import httpx


BASE_URL = "http://localhost:8000"


async def test_health():
    """Test health endpoints."""
    print("\n🏥 Testing Health Endpoints...")

    async with httpx.AsyncClient() as client:
        response = await client.get(f"{BASE_URL}/health")
        print(f"   /health: {response.status_code}")
        print(f"   {response.json()}")

        response = await client.get(f"{BASE_URL}/health/ready")
        print(f"   /health/ready: {response.status_code}")
        print(f"   {response.json()}")


async def send(client: httpx.AsyncClient, transcript: str, current_page: str = "/"):
    print(f"\n   📤 User: {transcript}")

    response = await client.post(
        f"{BASE_URL}/api/voice/process",
        json={"transcript": transcript, "currentPage": current_page}
    )

    if response.status_code == 200:
        data = response.json()["data"]
        print(f"   🎯 Intent: {data['intent']} ({data['confidence']:.2f})")
        print(f"   🤖 Citro: {data['reply'][:120]}")
        if data.get("action"):
            print(f"   ⚡ Action: {data['action']}")
        print(f"   ⏱️  Latency: {response.headers.get('X-Process-Time-Ms')}ms")
    else:
        print(f"   ❌ Error: {response.status_code}")
        print(f"   {response.text}")


async def test_navigation():
    """Test navigation commands, including Hinglish."""
    print("\n🧭 Testing Navigation...")

    async with httpx.AsyncClient(timeout=10.0) as client:
        for transcript in ["show events", "dikhao events", "open dashboard", "go back"]:
            await send(client, transcript)


async def test_event_knowledge():
    """Test knowledge-base questions."""
    print("\n📚 Testing Event Knowledge...")

    async with httpx.AsyncClient(timeout=10.0) as client:
        for transcript in [
            "tell me about cardiology",
            "when is robo soccer",
            "price of master chef",
            "cse events",
            "day 2 events",
            "what is citronics",
        ]:
            await send(client, transcript)


async def test_cart():
    """Test cart commands against the seeded event table."""
    print("\n🛒 Testing Cart...")

    async with httpx.AsyncClient(timeout=10.0) as client:
        await send(client, "add master chef to cart", "/events")
        await send(client, "buy codeology and checkout", "/events")
        await send(client, "remove master chef from cart", "/cart")


async def test_fallbacks():
    """Test low-confidence and validation paths."""
    print("\n❓ Testing Fallbacks...")

    async with httpx.AsyncClient(timeout=10.0) as client:
        await send(client, "asdkjasd")

        response = await client.post(f"{BASE_URL}/api/voice/process", json={"transcript": "   "})
        print(f"\n   Empty transcript: {response.status_code} {response.json()}")


async def main():
    """Run all tests."""
    print("=" * 60)
    print("🧪 Citro Voice API Test Client")
    print("=" * 60)
    print(f"Target: {BASE_URL}")

    try:
        await test_health()
        await test_navigation()
        await test_event_knowledge()
        await test_cart()
        await test_fallbacks()

        print("\n" + "=" * 60)
        print("✅ All tests completed!")
        print("=" * 60)

    except httpx.ConnectError:
        print("\n❌ Cannot connect to server. Make sure it's running:")
        print("   uvicorn citro.main:app --reload")


if __name__ == "__main__":
    asyncio.run(main())
