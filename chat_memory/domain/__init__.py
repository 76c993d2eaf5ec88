"""领域层模型与协议。

包含：
- models: Message / ChatMessage 以及生成结果、发送结果等标准数据结构。
- conversation: ConversationStore 存储协议。
- exceptions: 业务异常类型定义。
"""
