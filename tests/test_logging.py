from config.settings import mask_sensitive_data


class TestSensitiveDataMasking:
    def test_password_masked_in_log_output(self):
        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked_in_log_output(self):
        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_email_local_part_masked(self):
        event_dict = {"event": "test", "email": "ana.gomez@example.com"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["email"] == "a***@example.com"

    def test_non_sensitive_data_unchanged(self):
        event_dict = {"event": "cliente.saved", "cliente_id": 42, "action": "create"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result == {"event": "cliente.saved", "cliente_id": 42, "action": "create"}
