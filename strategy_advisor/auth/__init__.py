from strategy_advisor.auth.cognito import AuthSession, CognitoAuthenticator, CognitoCredentialProvider

__all__ = ['AuthSession', 'CognitoAuthenticator', 'CognitoCredentialProvider']
