"""Trimmed copies of forum listing pages used by the parser tests."""

NOTIFICATIONS_HTML = """
<div id="Rightbar">
  <div class="box"><div class="cell">
    <a href="/notifications" class="fade">3 条未读提醒</a>
  </div></div>
</div>
<div id="Main">
  <div class="box">
    <div class="cell"><div class="fr f12"><span class="snow">总共收到提醒&nbsp;</span><strong class="gray">123</strong></div>
      <a href="/">V2EX</a> <span class="chevron">&nbsp;›&nbsp;</span> 提醒系统</div>
    <div class="cell" id="n_1001">
      <table><tr>
        <td width="32" valign="top"><a href="/member/alice"><img src="https://cdn.example.com/avatar/alice.png" class="avatar" border="0"></a></td>
        <td valign="middle">
          <span class="fade"><a href="/member/alice"><strong>alice</strong></a> 在 <a href="/t/555#reply12" class="topic-link">Python packaging tips</a> 里回复了你</span>
          &nbsp; <span class="snow">3 小时前</span>
          <div class="sep5"></div>
          <div class="payload">thanks <a href="/member/bob">@bob</a></div>
        </td>
      </tr></table>
    </div>
    <div class="cell" id="n_1000">
      <table><tr>
        <td width="32" valign="top"><a href="/member/carol"><img src="https://cdn.example.com/avatar/carol.png" class="avatar"></a></td>
        <td valign="middle">
          <span class="fade"><a href="/member/carol"><strong>carol</strong></a> 收藏了你发布的主题 › <a href="/t/444#reply0" class="topic-link">Asyncio question</a></span>
          &nbsp; <span class="snow">1 天前</span>
        </td>
      </tr></table>
    </div>
    <div class="cell"><input type="number" class="page_input" min="1" max="3" value="1"></div>
  </div>
</div>
"""

MEMBER_TOPICS_HTML = """
<div id="Main">
  <div class="box">
    <div class="cell item">
      <table><tr>
        <td width="auto" valign="middle">
          <span class="item_title"><a href="/t/900#reply4" class="topic-link">First topic</a></span>
          <div class="sep5"></div>
          <span class="topic_info"><a class="node" href="/go/python">Python</a> &nbsp;•&nbsp; <strong><a href="/member/bob">bob</a></strong> &nbsp;•&nbsp; <span title="2024-01-02 10:00:00 +08:00">2 天前</span></span>
        </td>
        <td width="70" align="right" valign="middle"><a href="/t/900#reply4" class="count_livid">4</a></td>
      </tr></table>
    </div>
    <div class="cell item">
      <table><tr>
        <td width="auto" valign="middle">
          <span class="item_title"><a href="/t/901" class="topic-link">Second topic</a></span>
          <span class="topic_info"><a class="node" href="/go/share">分享创造</a> &nbsp;•&nbsp; <strong><a href="/member/bob">bob</a></strong></span>
        </td>
      </tr></table>
    </div>
    <div class="cell"><input type="number" class="page_input" min="1" max="4" value="1"></div>
  </div>
</div>
"""

MEMBER_REPLIES_HTML = """
<div id="Main">
  <div class="box">
    <div class="header">bob 最近回复了 <strong class="gray">45</strong></div>
    <div class="dock_area">
      <table><tr><td>
        <div class="fr"><span class="fade">5 分钟前</span></div>
        <span class="gray">回复了 carol 创建的主题 › <a href="/t/777#reply9">Editor wars</a></span>
      </td></tr></table>
    </div>
    <div class="inner">
      <div class="reply_content">vim, obviously <img src="https://i.example.com/x.png"></div>
    </div>
    <div class="dock_area">
      <table><tr><td>
        <span class="gray">回复了 dave 创建的主题 › <a href="/t/778">No floor</a></span>
      </td></tr></table>
    </div>
    <div class="inner"><div class="reply_content">+1</div></div>
  </div>
</div>
"""
