"""
异常定义

定义象棋引擎的各种异常类型。

规则引擎与搜索引擎本身是全函数，非法走法只通过返回值表达；
这里的异常只用于外部输入格式错误（FEN、坐标记法、配置文件）
和对局会话的误用。
"""


class XiangqiEngineError(Exception):
    """
    象棋引擎基础异常
    
    所有象棋引擎相关异常的基类。
    """
    
    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
    
    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class InvalidMoveError(XiangqiEngineError):
    """
    非法走法异常
    
    当对局会话收到不在合法走法列表中的走法时抛出。
    """
    
    def __init__(self, move_str: str, reason: str = ""):
        message = f"非法走法: {move_str}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "INVALID_MOVE")
        self.move_str = move_str
        self.reason = reason


class FenParseError(XiangqiEngineError):
    """
    FEN解析异常
    
    当FEN字符串或坐标记法格式错误时抛出。
    """
    
    def __init__(self, text: str, reason: str = ""):
        message = f"无法解析: {text!r}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "FEN_PARSE_ERROR")
        self.text = text
        self.reason = reason


class ConfigurationError(XiangqiEngineError):
    """
    配置错误异常
    
    当配置参数无效时抛出。
    """
    
    def __init__(self, config_name: str, reason: str = ""):
        message = f"配置错误 - {config_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "CONFIG_ERROR")
        self.config_name = config_name
        self.reason = reason


class GameStateError(XiangqiEngineError):
    """
    游戏状态异常
    
    当在已结束的对局上继续走子，或轮次不一致时抛出。
    """
    
    def __init__(self, state_description: str, reason: str = ""):
        message = f"游戏状态错误: {state_description}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "GAME_STATE_ERROR")
        self.state_description = state_description
        self.reason = reason
