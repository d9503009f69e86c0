"""Login and account creation pages."""

from __future__ import annotations

import enum
import html
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

from .. import api
from ..datatypes import UserData
from ..loadable import Uploadable
from ..runtime import Effects, Emit, Fetch, SetCredential


class AuthPage(str, enum.Enum):
    LOGIN = "login"
    CREATE = "create"


@dataclass
class Props:
    page: AuthPage = AuthPage.LOGIN
    on_login: Optional[Callable[[UserData], None]] = None


@dataclass
class State:
    page: AuthPage = AuthPage.LOGIN
    on_login: Optional[Callable[[UserData], None]] = None
    login_action: Uploadable[UserData] = field(default_factory=Uploadable.unloaded)
    create_action: Uploadable[UserData] = field(default_factory=Uploadable.unloaded)


# Messages

@dataclass(frozen=True)
class SetPage:
    page: AuthPage


@dataclass(frozen=True)
class SubmitLogin:
    user_name: str
    password: str


@dataclass(frozen=True)
class LoginSucceeded:
    token: str
    user: UserData


@dataclass(frozen=True)
class LoginFailed:
    message: Optional[str] = None


@dataclass(frozen=True)
class SubmitCreateAccount:
    user_name: str
    display_name: str
    password: str


@dataclass(frozen=True)
class AccountCreated:
    user: UserData


@dataclass(frozen=True)
class CreateAccountFailed:
    message: Optional[str] = None


def _login_succeeded(data: Any) -> LoginSucceeded:
    return LoginSucceeded(token=data["token"], user=UserData.from_response(data["user"]))


class AuthComponent:
    def init(self, props: Optional[Props]) -> Tuple[State, Effects]:
        props = props or Props()
        return State(page=props.page, on_login=props.on_login), []

    def update(self, state: State, msg) -> Tuple[State, Effects]:
        if isinstance(msg, SetPage):
            state.page = msg.page
            return state, []

        if isinstance(msg, SubmitLogin):
            return state, [
                Fetch(
                    slot="login_action",
                    request=api.login(msg.user_name, msg.password),
                    on_success=_login_succeeded,
                    on_failure=LoginFailed,
                )
            ]

        if isinstance(msg, LoginSucceeded):
            state.login_action = Uploadable.loaded(msg.user)
            effects: Effects = [SetCredential(msg.token)]
            if state.on_login is not None:
                effects.append(Emit(state.on_login, msg.user))
            return state, effects

        if isinstance(msg, LoginFailed):
            state.login_action = Uploadable.failed(msg.message)
            return state, []

        if isinstance(msg, SubmitCreateAccount):
            return state, [
                Fetch(
                    slot="create_action",
                    request=api.create_account(msg.user_name, msg.display_name, msg.password),
                    on_success=lambda data: AccountCreated(UserData.from_response(data)),
                    on_failure=CreateAccountFailed,
                )
            ]

        if isinstance(msg, AccountCreated):
            state.create_action = Uploadable.loaded(msg.user)
            state.page = AuthPage.LOGIN
            return state, []

        if isinstance(msg, CreateAccountFailed):
            state.create_action = Uploadable.failed(msg.message)
            return state, []

        raise TypeError(f"Auth cannot handle {msg!r}")

    def view(self, state: State) -> str:
        if state.page is AuthPage.CREATE:
            status = state.create_action.default_view(lambda _: "")
            return (
                '<div class="auth-page create-account">'
                "<h2>Create Account</h2>"
                '<input name="user_name" placeholder="User Name"/>'
                '<input name="display_name" placeholder="Display Name"/>'
                '<input name="password" type="password" placeholder="Password"/>'
                '<button class="submit">Create Account</button>'
                '<button class="nav-login">Back to Login</button>'
                f"{status}"
                "</div>"
            )

        def welcome(user: UserData) -> str:
            return f'<div class="login-success">Welcome, {html.escape(user.display_name)}</div>'

        return (
            '<div class="auth-page login">'
            "<h2>Login</h2>"
            '<input name="user_name" placeholder="User Name"/>'
            '<input name="password" type="password" placeholder="Password"/>'
            '<button class="submit">Login</button>'
            '<button class="nav-create-account">Create Account</button>'
            f"{state.login_action.default_view(welcome)}"
            "</div>"
        )


Auth = AuthComponent()
