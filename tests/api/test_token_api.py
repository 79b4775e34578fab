"""Tests for token API endpoints."""

from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from dsc_api.core.exceptions import ContractCallError, NetworkError
from factories import PRIVATE_KEY, SIGNER_ADDRESS, TX_HASH, USER_ADDRESS


class TestTokenInfo:
    """Tests for GET /api/token/info."""

    def test_get_token_info(self, client: TestClient, services):
        """Test token information is returned in the envelope."""
        info = {"name": "DecentralizedStableCoin", "symbol": "DSC", "owner": SIGNER_ADDRESS}
        services.token.get_token_info = AsyncMock(return_value=info)

        response = client.get("/api/token/info")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": info}

    def test_get_token_info_failure(self, client: TestClient, services):
        """Test node failures give a 500 envelope."""
        services.token.get_token_info = AsyncMock(side_effect=NetworkError("node down"))

        response = client.get("/api/token/info")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to fetch token information",
            "details": "node down",
        }


class TestBalance:
    """Tests for GET /api/token/balance."""

    def test_get_balance(self, client: TestClient, services):
        """Test the balance of a checksummed address is returned."""
        services.token.get_balance = AsyncMock(return_value="12.5")
        services.token.get_token_symbol = AsyncMock(return_value="DSC")

        response = client.get("/api/token/balance", params={"address": USER_ADDRESS.lower()})

        assert response.status_code == 200
        assert response.json()["data"] == {
            "address": USER_ADDRESS,
            "balance": "12.5",
            "symbol": "DSC",
        }
        services.token.get_balance.assert_called_once_with(USER_ADDRESS)

    def test_missing_address(self, client: TestClient):
        """Test a missing address is rejected."""
        response = client.get("/api/token/balance")

        assert response.status_code == 400
        assert response.json()["error"] == "Address parameter is required"

    def test_invalid_address(self, client: TestClient, services):
        """Test a malformed address is rejected before any call."""
        response = client.get("/api/token/balance", params={"address": "0x123"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid Ethereum address format"
        services.token.get_balance.assert_not_called()


class TestAllowance:
    """Tests for GET /api/token/allowance."""

    def test_get_allowance(self, client: TestClient, services):
        """Test allowance between two addresses."""
        services.token.get_allowance = AsyncMock(return_value="5.0")
        services.token.get_token_symbol = AsyncMock(return_value="DSC")

        response = client.get(
            "/api/token/allowance",
            params={"owner": SIGNER_ADDRESS, "spender": USER_ADDRESS},
        )

        assert response.status_code == 200
        assert response.json()["data"]["allowance"] == "5.0"

    def test_missing_spender(self, client: TestClient):
        """Test both parameters are required."""
        response = client.get("/api/token/allowance", params={"owner": SIGNER_ADDRESS})

        assert response.status_code == 400
        assert response.json()["error"] == "Both owner and spender parameters are required"


class TestMint:
    """Tests for POST /api/token/mint."""

    def test_mint(self, client: TestClient, services, tx_result):
        """Test minting with a request-scoped signer."""
        signed = services.token.connect.return_value
        signed.mint_tokens = AsyncMock(return_value=tx_result)

        response = client.post(
            "/api/token/mint",
            json={"to": USER_ADDRESS.lower(), "amount": "100", "privateKey": PRIVATE_KEY},
        )

        assert response.status_code == 200
        assert response.json()["data"] == {
            "recipient": USER_ADDRESS,
            "amount": "100",
            "transactionHash": TX_HASH,
            "blockNumber": 42,
            "gasUsed": "21000",
            "status": 1,
        }
        services.token.connect.assert_called_once_with(PRIVATE_KEY)
        signed.mint_tokens.assert_called_once_with(USER_ADDRESS, "100")

    def test_missing_private_key(self, client: TestClient, services):
        """Test a write without privateKey never binds a signer."""
        response = client.post("/api/token/mint", json={"to": USER_ADDRESS, "amount": "100"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "privateKey is required"}
        services.token.connect.assert_not_called()

    def test_invalid_recipient(self, client: TestClient, services):
        """Test a malformed recipient is rejected."""
        response = client.post(
            "/api/token/mint",
            json={"to": "0xabc", "amount": "100", "privateKey": PRIVATE_KEY},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid recipient address format"
        services.token.connect.assert_not_called()

    def test_invalid_amount(self, client: TestClient):
        """Test a non-positive amount is rejected."""
        response = client.post(
            "/api/token/mint",
            json={"to": USER_ADDRESS, "amount": "-5", "privateKey": PRIVATE_KEY},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Amount must be a positive number"

    def test_invalid_private_key(self, client: TestClient, services):
        """Test a malformed private key is a client error."""
        response = client.post(
            "/api/token/mint",
            json={"to": USER_ADDRESS, "amount": "1", "privateKey": "0x1234"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid private key format"
        services.token.connect.assert_not_called()

    def test_reverted_mint(self, client: TestClient, services):
        """Test a revert gives a 500 envelope."""
        signed = services.token.connect.return_value
        signed.mint_tokens = AsyncMock(
            side_effect=ContractCallError("DSC.mint reverted: Ownable: caller is not the owner")
        )

        response = client.post(
            "/api/token/mint",
            json={"to": USER_ADDRESS, "amount": "1", "privateKey": PRIVATE_KEY},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to mint tokens"
        assert "not the owner" in body["details"]

    def test_malformed_json(self, client: TestClient):
        """Test a body that is not JSON is a client error."""
        response = client.post(
            "/api/token/mint",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid request body"}


class TestOtherWrites:
    """Tests for burn, transfer, approve and renounce ownership."""

    def test_burn(self, client: TestClient, services, tx_result):
        """Test burning tokens."""
        signed = services.token.connect.return_value
        signed.burn_tokens = AsyncMock(return_value=tx_result)

        response = client.post("/api/token/burn", json={"amount": "5", "privateKey": PRIVATE_KEY})

        assert response.status_code == 200
        assert response.json()["data"]["amount"] == "5"
        signed.burn_tokens.assert_called_once_with("5")

    def test_transfer(self, client: TestClient, services, tx_result):
        """Test transferring tokens."""
        signed = services.token.connect.return_value
        signed.transfer = AsyncMock(return_value=tx_result)

        response = client.post(
            "/api/token/transfer",
            json={"to": USER_ADDRESS, "amount": 3, "privateKey": PRIVATE_KEY},
        )

        assert response.status_code == 200
        assert response.json()["data"]["recipient"] == USER_ADDRESS
        signed.transfer.assert_called_once_with(USER_ADDRESS, 3)

    def test_approve_requires_spender(self, client: TestClient):
        """Test approve reports the missing spender."""
        response = client.post(
            "/api/token/approve", json={"amount": "1", "privateKey": PRIVATE_KEY}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "spender is required"

    def test_approve(self, client: TestClient, services, tx_result):
        """Test approving a spender."""
        signed = services.token.connect.return_value
        signed.approve = AsyncMock(return_value=tx_result)

        response = client.post(
            "/api/token/approve",
            json={"spender": USER_ADDRESS, "amount": "1", "privateKey": PRIVATE_KEY},
        )

        assert response.status_code == 200
        assert response.json()["data"]["spender"] == USER_ADDRESS

    def test_renounce_ownership(self, client: TestClient, services, tx_result):
        """Test renouncing ownership reports the previous owner."""
        signed = services.token.connect.return_value
        signed.signer_address = SIGNER_ADDRESS
        signed.renounce_ownership = AsyncMock(return_value=tx_result)

        response = client.post(
            "/api/token/renounce-ownership", json={"privateKey": PRIVATE_KEY}
        )

        assert response.status_code == 200
        assert response.json()["data"]["previousOwner"] == SIGNER_ADDRESS
