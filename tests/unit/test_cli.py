"""
Unit tests for CLI commands.

Tests the command-line interface for account and household operations.
"""
import pytest
from unittest.mock import patch
from sqlalchemy.orm import Session

from app.cli import create_user, main, show_household
from app.models import Partnership, Profile, User


# =============================================================================
# create_user Tests
# =============================================================================

class TestCreateUser:
    """Tests for the create_user command."""

    def test_create_user_success(self, db: Session):
        with patch('app.cli.SessionLocal', return_value=db), \
             patch('builtins.print') as mock_print:

            create_user("Cli@Test.COM", "securepassword123", "Casey")

        user = db.query(User).filter(User.email == "cli@test.com").first()
        assert user is not None
        assert db.query(Profile).filter(Profile.id == user.id).one().full_name == "Casey"
        assert "User created successfully: cli@test.com" in str(mock_print.call_args)

    def test_create_user_duplicate_email(self, db: Session, test_user: User):
        with patch('app.cli.SessionLocal', return_value=db), \
             patch('builtins.print') as mock_print, \
             pytest.raises(SystemExit) as exc_info:

            create_user(test_user.email.upper(), "newpassword123")

        assert exc_info.value.code == 1
        assert "already exists" in str(mock_print.call_args)

    def test_create_user_password_too_short(self, db: Session):
        with patch('app.cli.SessionLocal', return_value=db), \
             patch('builtins.print') as mock_print, \
             pytest.raises(SystemExit) as exc_info:

            create_user("short@test.com", "short")

        assert exc_info.value.code == 1
        assert "at least 8 characters" in str(mock_print.call_args)

    def test_create_user_prompts_for_password(self, db: Session):
        with patch('app.cli.SessionLocal', return_value=db), \
             patch('getpass.getpass', side_effect=["password123", "password123"]), \
             patch('builtins.print'):

            create_user("prompt@test.com")

        assert db.query(User).filter(User.email == "prompt@test.com").first() is not None

    def test_create_user_password_mismatch(self, db: Session):
        with patch('app.cli.SessionLocal', return_value=db), \
             patch('getpass.getpass', side_effect=["password123", "different123"]), \
             patch('builtins.print') as mock_print, \
             pytest.raises(SystemExit):

            create_user("mismatch@test.com")

        assert "do not match" in str(mock_print.call_args)


# =============================================================================
# household Tests
# =============================================================================

class TestShowHousehold:
    """Tests for the household command."""

    def test_shows_partner(
        self, db: Session, partnership: Partnership, test_user: User, partner_user: User
    ):
        with patch('app.cli.SessionLocal', return_value=db), \
             patch('builtins.print') as mock_print:

            show_household(test_user.email)

        output = "\n".join(str(call.args[0]) for call in mock_print.call_args_list)
        assert "State: accepted" in output
        assert partner_user.email in output
        assert "Partner name: Bob" in output

    def test_alone(self, db: Session, test_user: User):
        with patch('app.cli.SessionLocal', return_value=db), \
             patch('builtins.print') as mock_print:

            show_household(test_user.email)

        output = "\n".join(str(call.args[0]) for call in mock_print.call_args_list)
        assert "State: none" in output
        assert "Partner name" not in output

    def test_unknown_user(self, db: Session):
        with patch('app.cli.SessionLocal', return_value=db), \
             patch('builtins.print'), \
             pytest.raises(SystemExit) as exc_info:

            show_household("ghost@example.com")

        assert exc_info.value.code == 1


# =============================================================================
# main Tests
# =============================================================================

class TestMain:
    """Tests for argument parsing."""

    def test_no_command_prints_help(self):
        with patch('sys.argv', ['app.cli']), \
             patch('argparse.ArgumentParser.print_help') as mock_help, \
             pytest.raises(SystemExit):

            main()

        mock_help.assert_called_once()

    def test_create_user_dispatch(self):
        with patch('sys.argv', ['app.cli', 'create-user', '--email', 'x@test.com', '--password', 'password123']), \
             patch('app.cli.create_user') as mock_create:

            main()

        mock_create.assert_called_once_with('x@test.com', 'password123', None)

    def test_household_dispatch(self):
        with patch('sys.argv', ['app.cli', 'household', '--email', 'x@test.com']), \
             patch('app.cli.show_household') as mock_show:

            main()

        mock_show.assert_called_once_with('x@test.com')
